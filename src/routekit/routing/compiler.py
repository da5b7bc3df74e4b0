"""URI template compiler.

Turns a user-facing path template into the regex source used by the
matcher, recording parameter names and their fragments in order.

Template syntax::

    /users/{id}              one segment, bound to ``id``
    /users/{id}:int          segment matched by the ``int`` fragment
    /posts/{page}?           optional segment (separator included)
    /year/{y}:([0-9]{4})     unknown pattern names are literal regex
    /files/?                 anonymous single segment
    /files/*                 anonymous catch-all (rest of the path)

Named parameters are compiled here; the ``/?`` and ``/*`` wildcards stay
in the output until :func:`expand_wildcards` runs on the full,
group-prefixed path.
"""

import re
from dataclasses import dataclass

from routekit.errors import ConfigurationError
from routekit.routing.patterns import WILDCARD_REST, WILDCARD_SEGMENT, PatternRegistry

_SLASHES = re.compile(r"/+")
_NAME_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-")


@dataclass(frozen=True, slots=True)
class ParamToken:
    """A ``/{name}?:pattern`` token found in a template.

    ``start``/``end`` delimit the token in the source template, leading
    slash included.
    """

    name: str
    optional: bool
    pattern: str | None
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class CompiledUri:
    """Result of compiling one template."""

    pattern: str
    params: tuple[str, ...] = ()
    fragments: tuple[str, ...] = ()


def collapse_slashes(uri: str) -> str:
    """Prefix a slash and collapse every run of slashes into one."""
    return _SLASHES.sub("/", "/" + uri)


def normalize_uri(uri: str) -> str:
    """Normalize a route template: leading and trailing slash, no doubles.

    The root template stays ``/``.
    """
    uri = uri.strip()
    if uri == "/":
        return uri
    return collapse_slashes(uri + "/")


def normalize_path(path: str) -> str:
    """Normalize a request path to the ``/a/b/`` form the matcher expects."""
    return collapse_slashes(path.strip().strip("/") + "/")


def read_param(template: str, pos: int) -> ParamToken | None:
    """Try to read a named-parameter token starting at *pos*."""
    if not template.startswith("/{", pos):
        return None
    size = len(template)
    start = end = pos + 2
    while end < size and template[end] in _NAME_CHARS:
        end += 1
    if end == start or end >= size or template[end] != "}":
        return None
    name = template[start:end]
    end += 1

    optional = end < size and template[end] == "?"
    if optional:
        end += 1

    pattern = None
    if end < size and template[end] == ":":
        stop = end + 1
        while stop < size and template[stop] != "/":
            stop += 1
        # A bare ":" followed by "/" is literal text, not a pattern
        if stop > end + 1:
            pattern = template[end + 1 : stop]
            end = stop

    return ParamToken(name=name, optional=optional, pattern=pattern, start=pos, end=end)


def tokenize(template: str) -> list[str | ParamToken]:
    """Split *template* into literal text and parameter tokens.

    Examples::

        "/users/{id}:int/edit" -> ["/users", ParamToken("id", ...), "/edit"]
        "/about"               -> ["/about"]
    """
    tokens: list[str | ParamToken] = []
    literal_start = pos = 0
    while pos < len(template):
        token = read_param(template, pos)
        if token is None:
            pos += 1
            continue
        if literal_start < pos:
            tokens.append(template[literal_start:pos])
        tokens.append(token)
        pos = literal_start = token.end
    if literal_start < len(template):
        tokens.append(template[literal_start:])
    return tokens


def resolve_fragment(token: ParamToken, patterns: PatternRegistry) -> str:
    """Regex fragment for *token*, made skippable when it is optional.

    ``/([0-9]+)`` becomes ``(/[0-9]+)?`` so the separator is optional too.
    """
    fragment = patterns.segment if token.pattern is None else patterns.resolve(token.pattern)
    if token.optional:
        fragment = fragment.replace("/(", "(/") + "?"
    return fragment


def compile_uri(template: str, patterns: PatternRegistry) -> CompiledUri:
    """Replace named parameters in *template* with their fragments."""
    parts: list[str] = []
    params: list[str] = []
    fragments: list[str] = []
    for token in tokenize(template.strip()):
        if isinstance(token, str):
            parts.append(token)
            continue
        fragment = resolve_fragment(token, patterns)
        parts.append(fragment)
        params.append(token.name)
        fragments.append(fragment)
    return CompiledUri("".join(parts), tuple(params), tuple(fragments))


def expand_wildcards(path: str, patterns: PatternRegistry) -> str:
    """Substitute the ``/?`` and ``/*`` wildcards with their fragments."""
    return path.replace(WILDCARD_SEGMENT, patterns.segment).replace(WILDCARD_REST, patterns.rest)


def compile_pattern(path: str, patterns: PatternRegistry, *, strict: bool = True) -> re.Pattern[str]:
    """Anchor a compiled path into a case-insensitive regex.

    Always anchored at the start; anchored at the end only when *strict*.
    Non-strict patterns act as prefix checks (groups, middleware scopes).
    """
    source = expand_wildcards(collapse_slashes(path), patterns)
    # A leading optional segment already carries its own slash
    if source.startswith("/(/"):
        source = source[1:]
    try:
        return re.compile(f"^{source}{'$' if strict else ''}", re.IGNORECASE)
    except re.error as exc:
        msg = f"Invalid route pattern {path!r}: {exc}"
        raise ConfigurationError(msg) from exc
