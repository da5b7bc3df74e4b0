"""RouteKit exception hierarchy.

Shared across Router, App, handler resolution, and the ASGI boundary so
every module raises and catches the same types.

Match failures and middleware halts are ordinary control flow and never
surface here.
"""

from dataclasses import dataclass


class RouteKitError(Exception):
    """Base for all routekit-specific errors."""


class ConfigurationError(RouteKitError):
    """Raised while building the route table.

    Registration aborts for the offending call; nothing is retried.
    """


class ControllerNotFound(ConfigurationError):  # noqa: N818
    """A controller or resource class could not be resolved."""

    def __init__(self, controller: object) -> None:
        self.controller = controller
        super().__init__(f"Controller not found: {controller!r} (try a dotted import path)")


class CallbackNotFound(RouteKitError):  # noqa: N818
    """A handler reference could not be resolved to a callable.

    Raised at dispatch time, when the specific handler is invoked.
    """

    def __init__(self, reference: object, detail: str = "") -> None:
        self.reference = reference
        msg = f"Callable not found: {reference!r}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class RouteNotFound(RouteKitError, LookupError):  # noqa: N818
    """Reverse routing was asked for a name that was never registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No route named {name!r}")


@dataclass(frozen=True, slots=True)
class HTTPError(RouteKitError):
    """An error that maps directly to an HTTP status code.

    Handlers and middleware may raise it; the ASGI boundary turns it into
    a response with the same status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
