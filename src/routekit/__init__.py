"""RouteKit: a request router with regex URI templates.

Routes, groups, dotted route names with reverse lookup, and path-scoped
before/after middleware, served over ASGI.

Basic usage::

    from routekit import App

    app = App()

    @app.get("/users/{id}:int", name="users.show")
    def show(ctx, user_id):
        return {"id": user_id}

    app.url_for("users.show", id=42)   # "http://host/users/42"
    app.run()
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "AppConfig",
    "CallbackNotFound",
    "ConfigurationError",
    "Context",
    "ControllerNotFound",
    "HTTPError",
    "HTTPMethod",
    "NotFound",
    "Request",
    "Response",
    "RouteKitError",
    "RouteNotFound",
    "Router",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routekit`` fast while providing a clean top-level API.
    """
    if name == "App":
        from routekit.app import App

        return App

    if name == "AppConfig":
        from routekit.config import AppConfig

        return AppConfig

    if name == "Router":
        from routekit.routing.router import Router

        return Router

    if name == "HTTPMethod":
        from routekit.routing.methods import HTTPMethod

        return HTTPMethod

    if name == "Request":
        from routekit.http.request import Request

        return Request

    if name == "Response":
        from routekit.http.response import Response

        return Response

    if name in ("Context", "get_request"):
        from routekit import context as _ctx

        return getattr(_ctx, name)

    if name in (
        "CallbackNotFound",
        "ConfigurationError",
        "ControllerNotFound",
        "HTTPError",
        "NotFound",
        "RouteKitError",
        "RouteNotFound",
    ):
        from routekit import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
