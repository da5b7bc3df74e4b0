"""Route table, grouping and dispatch.

Routes are registered once, in order, and compiled into immutable
``Route`` records. ``dispatch()`` walks the table for each request:
the first matching route wins unless it was registered with
``continue_matching``, in which case later routes are still tried and
every matched handler runs in registration order.

Usage::

    router = Router()
    router.get("/", home).name("home")

    def admin(r):
        r.get("/users/{id}:int", show_user, name="users.show")

    router.group("/admin", admin)
    router.before("/admin", require_login)

    response = router.dispatch(Request.build("GET", "/admin/users/42"))
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from typing import TYPE_CHECKING, Any, TypeAlias

from routekit._internal.types import HandlerRef
from routekit.context import Context
from routekit.errors import ConfigurationError, ControllerNotFound
from routekit.http.request import Request
from routekit.http.response import Response
from routekit.middleware.chain import MiddlewareChain, MiddlewareEntry
from routekit.routing.binding import BoundArgs, bind_args
from routekit.routing.compiler import (
    collapse_slashes,
    compile_pattern,
    compile_uri,
    normalize_uri,
)
from routekit.routing.handlers import find_controller, resolve_handler
from routekit.routing.matcher import match_path
from routekit.routing.methods import HTTPMethod, action_verbs, normalize_methods, split_camel
from routekit.routing.names import NameRegistry, build_template, clean_name, dotted_name, literal_name
from routekit.routing.patterns import PatternRegistry
from routekit.routing.route import GroupFrame, Route, RouteOptions

if TYPE_CHECKING:
    from routekit.app import App

logger = logging.getLogger("routekit.router")

Methods: TypeAlias = Iterable[str] | str | None
Options: TypeAlias = RouteOptions | Mapping[str, Any] | None

NOT_FOUND_BODY = "<h1>404 Not Found</h1>"


def _resource_not_found(ctx: Context, *args: Any) -> Response:
    return Response.json({"error": "resource 404"}, status=404)


def _verb(*methods: str) -> Callable[..., Router]:
    label = "/".join(methods) or "any method"

    def register(
        self: Router,
        uri: str | list[str],
        handler: HandlerRef,
        options: Options = None,
        **kwargs: Any,
    ) -> Router:
        return self.route(methods, uri, handler, options, **kwargs)

    register.__doc__ = f"Register a route for {label}."
    return register


class Router:
    """Ordered route table with groups, names, permissions and middleware."""

    def __init__(
        self,
        patterns: Mapping[str, str] | None = None,
        *,
        not_found_body: str = NOT_FOUND_BODY,
    ) -> None:
        self.patterns = PatternRegistry(patterns)
        self.names = NameRegistry()
        self.middleware = MiddlewareChain(self.patterns)
        self.controllers: dict[str, type] = {}
        self.not_found_body = not_found_body
        self._routes: list[Route] = []
        self._permissions: dict[str, Any] = {}
        self._frames: list[GroupFrame] = []
        self._current: Route | None = None

    def __repr__(self) -> str:
        return f"Router({len(self._routes)} routes, {len(self.names)} names)"

    # -- Registration --

    def add_patterns(self, patterns: Mapping[str, str]) -> Router:
        """Merge named regex fragments, e.g. ``{"slug": "/([a-z0-9-]+)"}``.

        Only routes registered afterwards see the new names.
        """
        self.patterns.add(patterns)
        return self

    def register_controller(self, cls: type, name: str | None = None) -> type:
        """Make *cls* resolvable by name in ``"Class@method"`` references.

        Returns the class, so it can be used as a decorator.
        """
        self.controllers[name or cls.__name__] = cls
        return cls

    def route(
        self,
        methods: Methods,
        uri: str | list[str] | tuple[str, ...],
        handler: HandlerRef,
        options: Options = None,
        *,
        name: str | None = None,
        permissions: Any = None,
        **extra: Any,
    ) -> Router:
        """Register *handler* for *methods* on *uri*.

        A list of URIs registers one route per entry. Keyword arguments
        not listed here are merged into the route options, so
        ``continue_matching=True`` and ``ajax_only=True`` can be passed
        directly.
        """
        if isinstance(uri, (list, tuple)):
            for item in uri:
                self.route(methods, item, handler, options, name=name, permissions=permissions, **extra)
            return self

        if isinstance(options, RouteOptions):
            opts = replace(options, extra={**options.extra, **extra}) if extra else options
        else:
            opts = RouteOptions.from_mapping({**(options or {}), **extra})

        normalized = normalize_uri(uri)
        compiled = compile_uri(normalized, self.patterns)
        frame = self._frames[-1] if self._frames else None
        path = collapse_slashes((frame.prefix if frame else "") + compiled.pattern)

        route = Route(
            uri=normalized,
            path=path,
            pattern=compile_pattern(path, self.patterns),
            methods=normalize_methods(methods),
            handler=handler,
            params=(*frame.params, *compiled.params) if frame else compiled.params,
            fragments=(*frame.fragments, *compiled.fragments) if frame else compiled.fragments,
            options=opts,
            group_matcher=frame.matcher if frame else None,
            namespace=frame.namespace if frame else "",
        )
        self._routes.append(route)
        self._current = route
        logger.debug("Registered %s %s -> %r", sorted(route.methods) or "ANY", path, handler)

        auto_name = clean_name(normalized)
        if auto_name:
            self.name(auto_name)
        if name is not None:
            self.name(name)
        if permissions is not None:
            self.permissions(permissions)
        return self

    get = _verb(HTTPMethod.GET)
    post = _verb(HTTPMethod.POST)
    put = _verb(HTTPMethod.PUT)
    patch = _verb(HTTPMethod.PATCH)
    delete = _verb(HTTPMethod.DELETE)
    head = _verb(HTTPMethod.HEAD)
    options = _verb(HTTPMethod.OPTIONS)
    any = _verb()

    def match(
        self,
        methods: Methods,
        uri: str | list[str],
        handler: HandlerRef,
        options: Options = None,
        **kwargs: Any,
    ) -> Router:
        """Register a route for several verbs: ``match("get_post", ...)``."""
        return self.route(methods, uri, handler, options, **kwargs)

    def name(self, name: str) -> Router:
        """Name the most recently registered route.

        The active group names are prepended. Registering an existing
        name replaces its template.
        """
        route = self._current
        if route is None:
            msg = "name() called before any route was registered"
            raise ConfigurationError(msg)
        dotted = dotted_name(name)
        if not dotted:
            return self
        frame = self._frames[-1] if self._frames else None
        full_name = f"{frame.name}.{dotted}" if frame and frame.name else dotted
        self.names.add(full_name, build_template(route.path, route.params, route.fragments))
        return self

    def permissions(self, payload: Any) -> Router:
        """Attach *payload* to the most recently registered route's path."""
        route = self._current
        if route is None:
            msg = "permissions() called before any route was registered"
            raise ConfigurationError(msg)
        self._permissions[route.path] = payload
        return self

    def permissions_for(self, path: str) -> Any:
        """Permission payload stored for the literal *path*, or ``None``."""
        return self._permissions.get(collapse_slashes(path))

    # -- Groups --

    def group(
        self,
        prefix: str | list[str] | tuple[str, ...],
        builder: Callable[..., Any],
        *,
        name: str | list[str] | None = None,
        namespace: str | list[str] | None = None,
    ) -> Router:
        """Register the routes created by *builder* under *prefix*.

        *builder* is called once, with this router if it accepts an
        argument. *name* defaults to the literal part of the prefix and
        is prepended to every route name registered inside; *namespace*
        prefixes string handler references. A list of prefixes runs the
        builder once per entry, taking the entry's *name*/*namespace*
        when those are lists too.
        """
        if isinstance(prefix, (list, tuple)):
            for index, entry in enumerate(prefix):
                self.group(
                    entry,
                    builder,
                    name=name[index] if isinstance(name, (list, tuple)) else name,
                    namespace=namespace[index] if isinstance(namespace, (list, tuple)) else namespace,
                )
            return self

        depth = len(self._frames)
        self._frames.append(self._frame(prefix, name, namespace))
        logger.debug("Entering group %s", self._frames[-1].prefix)
        try:
            call_builder(builder, self)
        finally:
            del self._frames[depth:]
        return self

    def _frame(self, prefix: str, name: str | None, namespace: str | None) -> GroupFrame:
        parent = self._frames[-1] if self._frames else None
        normalized = normalize_uri(prefix)
        compiled = compile_uri(normalized, self.patterns)
        path = collapse_slashes((parent.prefix if parent else "") + compiled.pattern)
        label = dotted_name(name) if name is not None else literal_name(normalized)
        parent_name = parent.name if parent else ""
        parent_namespace = parent.namespace if parent else ""
        return GroupFrame(
            prefix=path,
            params=(*parent.params, *compiled.params) if parent else compiled.params,
            fragments=(*parent.fragments, *compiled.fragments) if parent else compiled.fragments,
            name=".".join(part for part in (parent_name, label) if part),
            namespace=".".join(part for part in (parent_namespace, (namespace or "").strip(".")) if part),
            matcher=compile_pattern(path, self.patterns, strict=False),
        )

    # -- Controllers and resources --

    def _controller_class(self, cls: type | str) -> type:
        namespace = self._frames[-1].namespace if self._frames else ""
        found = find_controller(cls, self.controllers, namespace)
        if found is None:
            raise ControllerNotFound(cls)
        return found

    def controller(self, base: str, cls: type | str, options: Options = None, **kwargs: Any) -> Router:
        """Route every public ``<verbs><Words>`` method of *cls* under *base*.

        ``getUserList`` answers GET on ``base/user-list`` (and below),
        ``get_postSearch`` answers GET and POST on ``base/search``,
        ``anyPing`` answers every method on ``base/ping``. ``getIndex``
        answers on *base* itself and is registered last.

        Raises:
            ControllerNotFound: If *cls* cannot be resolved.
        """
        target = self._controller_class(cls)
        base = base.rstrip("/")
        index: list[tuple[frozenset[str], str]] = []

        for attr in _public_methods(target):
            verb_token, *words = split_camel(attr)
            verbs = action_verbs(verb_token)
            if verbs is None:
                continue
            if words and words[0] == "Index":
                index.append((verbs, attr))
                continue
            full = f"{base}/{'-'.join(words)}"
            self.route(verbs, [f"{full}/*", full], (target, attr), options, **kwargs)
            self.name(full.lower())

        for verbs, attr in index:
            self.route(verbs, [f"{base}/*", base or "/"], (target, attr), options, **kwargs)
            self.name(base.lower())
        return self

    def resource(
        self,
        base: str,
        cls: type | str,
        *,
        id_pattern: str = ":int",
        multi_id_pattern: str = ":multi_int",
        **options: Any,
    ) -> Router:
        """Register the conventional CRUD routes for *cls* under *base*.

        ======  ===================  =======
        GET     base                 index
        GET     base/get             get
        GET     base/create          create
        POST    base                 store
        GET     base/{id}            show
        GET     base/{id}/edit       edit
        PUT     base/{id}            update
        PATCH   base/{id}            update
        DELETE  base/{id}            destroy (comma-separated ids)
        ======  ===================  =======

        Anything else below *base* answers a JSON 404.

        Raises:
            ControllerNotFound: If *cls* cannot be resolved.
        """
        target = self._controller_class(cls)
        base = base.rstrip("/")
        with_id = f"{base}/{{id}}{id_pattern}"
        multi_id = f"{base}/{{id}}{multi_id_pattern}"
        label = dotted_name(base)

        table: tuple[tuple[tuple[str, ...], str, str, str], ...] = (
            ((HTTPMethod.GET,), base or "/", "index", ""),
            ((HTTPMethod.GET,), f"{base}/get", "get", ".get"),
            ((HTTPMethod.GET,), f"{base}/create", "create", ".create"),
            ((HTTPMethod.POST,), base or "/", "store", ".store"),
            ((HTTPMethod.GET,), with_id, "show", ".show"),
            ((HTTPMethod.GET,), f"{with_id}/edit", "edit", ".edit"),
            ((HTTPMethod.PUT, HTTPMethod.PATCH), with_id, "update", ".update"),
            ((HTTPMethod.DELETE,), multi_id, "destroy", ".destroy"),
        )
        for methods, uri, action, suffix in table:
            self.route(methods, uri, (target, action), options)
            self.name(f"{label}{suffix}")

        self.any(f"{base}/*", _resource_not_found)
        return self

    # -- Middleware --

    def before(self, scope: str, callback: HandlerRef) -> Router:
        """Run *callback* before the handlers of requests under *scope*."""
        self.middleware.before(scope, callback)
        return self

    def after(self, scope: str, callback: HandlerRef) -> Router:
        """Run *callback* after the handlers of requests under *scope*."""
        self.middleware.after(scope, callback)
        return self

    def use(self, callback: HandlerRef, event: str = "before") -> Router:
        self.middleware.use(callback, event)
        return self

    @property
    def before_middleware(self) -> tuple[MiddlewareEntry, ...]:
        return tuple(self.middleware.before_entries)

    @property
    def after_middleware(self) -> tuple[MiddlewareEntry, ...]:
        return tuple(self.middleware.after_entries)

    # -- Introspection --

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in registration order."""
        return tuple(self._routes)

    def url(self, name: str, args: Mapping[str, Any] | None = None) -> str | None:
        """Template for route *name* with *args* filled in, or ``None``."""
        return self.names.resolve(name, args)

    # -- Dispatch --

    def resolve(self, reference: HandlerRef, namespace: str = "") -> Callable[..., Any]:
        """Turn a handler reference into a callable.

        Raises:
            CallbackNotFound: If the reference cannot be resolved.
        """
        return resolve_handler(reference, self.controllers, namespace)

    def match_request(self, request: Request) -> list[tuple[Route, BoundArgs]]:
        """Routes matched by *request*, each with its bound arguments.

        Stops at the first match that does not continue matching.
        """
        hits: list[tuple[Route, BoundArgs]] = []
        for route in self._routes:
            if route.options.ajax_only and not request.ajax:
                continue
            if not route.allows(request.method):
                continue
            if route.group_matcher is not None and not route.group_matcher.match(request.path):
                continue
            result = match_path(route.pattern, request.path)
            if not result.matched:
                continue
            hits.append((route, bind_args(route.params, result.values)))
            logger.debug("Matched %s %s -> %s", request.method, request.path, route.path)
            if not route.options.continue_matching:
                break
        return hits

    def dispatch(self, request: Request, app: App | None = None) -> Response:
        """Run the before-chain, matched handlers and after-chain for *request*.

        Unmatched requests answer 404 with ``not_found_body``, except
        OPTIONS requests which answer an empty 200. A before-callback
        returning ``False`` skips the handlers and the after-chain.

        Raises:
            CallbackNotFound: If a matched handler cannot be resolved.
        """
        hits = self.match_request(request)
        if not hits:
            if request.method == HTTPMethod.OPTIONS:
                return Response("")
            logger.debug("No route for %s %s", request.method, request.path)
            return Response(self.not_found_body, status=404)

        args = hits[-1][1]
        request = replace(request, args=args, permissions=self.permissions_for(request.path))
        ctx = Context(request=request, args=args, router=self, app=app)

        if not self.middleware.emit(self.middleware.before_entries, ctx, self.resolve):
            return ctx.to_response()

        for route, bound in hits:
            ctx.args = bound
            handler = self.resolve(route.handler, route.namespace)
            ctx.absorb(handler(ctx, *bound.positional()))

        ctx.args = args
        self.middleware.emit(self.middleware.after_entries, ctx, self.resolve)
        return ctx.to_response()

    end = dispatch


def call_builder(builder: Callable[..., Any], target: object) -> None:
    """Call a group builder with *target*, or with nothing if it takes no arguments."""
    try:
        takes_router = bool(inspect.signature(builder).parameters)
    except (TypeError, ValueError):
        takes_router = True
    if takes_router:
        builder(target)
    else:
        builder()


def _public_methods(cls: type) -> list[str]:
    """Public callable attributes of *cls*, in declaration order, bases first."""
    found: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for attr, value in vars(klass).items():
            if attr.startswith("_"):
                continue
            if callable(value) or isinstance(value, (staticmethod, classmethod)):
                found[attr] = None
    return list(found)
