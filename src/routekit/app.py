"""RouteKit application class.

Owns one Router, an explicit extension registry, error handlers and
lifecycle hooks. Registration happens during setup through decorators;
every request is dispatched synchronously through ``handle()``.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

from routekit._internal.asgi import Receive, Scope, Send
from routekit._internal.types import Handler, HandlerRef
from routekit.config import AppConfig
from routekit.context import get_request, request_var
from routekit.errors import RouteNotFound
from routekit.http.request import Request
from routekit.http.response import Response
from routekit.routing.methods import HTTPMethod
from routekit.routing.router import Router, call_builder
from routekit.server.handler import handle_request
from routekit.urls import build_url

ErrorHandler: TypeAlias = Callable[..., Any]


def _verb(*methods: str) -> Callable[..., Callable[[Handler], Handler]]:
    label = "/".join(methods) or "any method"

    def register(
        self: App,
        path: str | list[str],
        *,
        name: str | None = None,
        permissions: Any = None,
        **options: Any,
    ) -> Callable[[Handler], Handler]:
        return self.route(path, methods=list(methods), name=name, permissions=permissions, **options)

    register.__doc__ = f"Register a {label} route handler via decorator."
    return register


class App:
    """The routekit application.

    Usage::

        app = App()

        @app.get("/users/{id}:int", name="users.show")
        def show(ctx, user_id):
            return {"id": user_id}
    """

    __slots__ = (
        "_error_handlers",
        "_extensions",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
        "router",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        patterns: Mapping[str, str] | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.router = Router(patterns, not_found_body=self.config.not_found_body)
        self._extensions: dict[str, Any] = {}
        self._error_handlers: dict[int | type[BaseException], ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []

    # -- Route registration --

    def route(
        self,
        path: str | list[str],
        *,
        methods: list[str] | str | None = None,
        name: str | None = None,
        permissions: Any = None,
        **options: Any,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URI template, or a list of templates.
            methods: HTTP methods, or a ``"get_post"`` combination.
                Defaults to ``["GET"]``; an empty list accepts any method.
            name: Optional route name for URL generation.
            permissions: Payload attached to requests for this exact path.
            options: Route options (``ajax_only``, ``continue_matching``,
                or anything an extension reads from ``route.options.extra``).
        """
        verbs = [HTTPMethod.GET] if methods is None else methods

        def decorator(func: Handler) -> Handler:
            self.router.route(verbs, path, func, options, name=name, permissions=permissions)
            return func

        return decorator

    get = _verb(HTTPMethod.GET)
    post = _verb(HTTPMethod.POST)
    put = _verb(HTTPMethod.PUT)
    patch = _verb(HTTPMethod.PATCH)
    delete = _verb(HTTPMethod.DELETE)
    head = _verb(HTTPMethod.HEAD)
    options = _verb(HTTPMethod.OPTIONS)
    any = _verb()

    def group(
        self,
        prefix: str | list[str],
        builder: Callable[..., Any] | None = None,
        *,
        name: str | list[str] | None = None,
        namespace: str | list[str] | None = None,
    ) -> Any:
        """Register routes under *prefix*; usable directly or as a decorator.

        The builder receives this app when it takes an argument::

            @app.group("/admin")
            def admin(app):
                @app.get("/users")
                def users(ctx): ...
        """

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.router.group(prefix, lambda: call_builder(func, self), name=name, namespace=namespace)
            return func

        if builder is None:
            return decorator
        decorator(builder)
        return self

    def controller(self, base: str, cls: type | str | None = None, **options: Any) -> Any:
        """Route a controller's ``<verbs><Words>`` methods under *base*.

        Without *cls* this returns a class decorator.
        """
        if cls is None:

            def decorator(target: type) -> type:
                self.router.controller(base, target, options)
                return target

            return decorator
        self.router.controller(base, cls, options)
        return self

    def resource(self, base: str, cls: type | str | None = None, **options: Any) -> Any:
        """Register the CRUD routes of a resource controller under *base*.

        Without *cls* this returns a class decorator.
        """
        if cls is None:

            def decorator(target: type) -> type:
                self.router.resource(base, target, **options)
                return target

            return decorator
        self.router.resource(base, cls, **options)
        return self

    def register_controller(self, cls: type | None = None, *, name: str | None = None) -> Any:
        """Make a class resolvable in ``"Class@method"`` handler strings."""
        if cls is None:
            return lambda target: self.router.register_controller(target, name)
        return self.router.register_controller(cls, name)

    def add_patterns(self, patterns: Mapping[str, str]) -> None:
        self.router.add_patterns(patterns)

    # -- Middleware --

    def before(self, scope: str, callback: HandlerRef | None = None) -> Any:
        """Run a callback before the handlers of requests under *scope*.

        Without *callback* this returns a decorator.
        """
        if callback is None:

            def decorator(func: Handler) -> Handler:
                self.router.before(scope, func)
                return func

            return decorator
        self.router.before(scope, callback)
        return callback

    def after(self, scope: str, callback: HandlerRef | None = None) -> Any:
        """Run a callback after the handlers of requests under *scope*."""
        if callback is None:

            def decorator(func: Handler) -> Handler:
                self.router.after(scope, func)
                return func

            return decorator
        self.router.after(scope, callback)
        return callback

    def use(self, callback: HandlerRef, event: str = "before") -> HandlerRef:
        """Run *callback* for every request, before or after the handlers."""
        self.router.use(callback, event)
        return callback

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[BaseException],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    @property
    def error_handlers(self) -> dict[int | type[BaseException], ErrorHandler]:
        return self._error_handlers

    # -- Extensions --

    def register(self, name: str, value: Any) -> Any:
        """Store a named extension value (a service, a helper, a setting)."""
        self._extensions[name] = value
        return value

    def extension(self, name: str) -> Any:
        """Return the extension registered under *name*.

        Raises:
            KeyError: If nothing was registered under *name*.
        """
        try:
            return self._extensions[name]
        except KeyError:
            msg = f"No extension registered as {name!r}"
            raise KeyError(msg) from None

    def __contains__(self, name: object) -> bool:
        return name in self._extensions

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup.
        """
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._shutdown_hooks.append(func)
        return func

    async def startup(self) -> None:
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def shutdown(self) -> None:
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- URLs --

    def url(self, path: str | None = None) -> str:
        """Absolute URL for *path*.

        The base is ``config.base_url``, or the origin of the request
        being handled when that is empty.
        """
        base = self.config.base_url
        if not base:
            try:
                base = get_request().url
            except LookupError:
                base = ""
        return build_url(base, path)

    def url_for(self, name: str, /, **args: Any) -> str:
        """Absolute URL of the route named *name*.

        Raises:
            RouteNotFound: If no route was registered under *name*.
        """
        template = self.router.url(name, args)
        if template is None:
            raise RouteNotFound(name)
        return self.url(template)

    # -- Dispatch --

    def handle(self, request: Request) -> Response:
        """Dispatch *request* and return the buffered response."""
        token = request_var.set(request)
        try:
            return self.router.dispatch(request, self)
        finally:
            request_var.reset(token)

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the pounce development server."""
        from routekit.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, app=self)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Runs registered startup/shutdown hooks and signals completion
        back to the server.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return
