"""Handler resolution: turn a handler reference into a callable.

Accepted references:

- a callable, used as-is
- a ``(class_or_instance, "method")`` pair; classes are instantiated
  with no arguments
- a ``"Class@method"`` string; the method defaults to ``index`` and the
  class is looked up in the router's controller registry, then imported
  as a dotted path (``"app.controllers.Users@show"``)
- a dotted ``"module:function"`` / ``"module.function"`` string

Resolution is lazy: it happens when the handler is about to run, and a
failure raises ``CallbackNotFound`` then.
"""

import importlib
from collections.abc import Callable, Mapping
from typing import Any

from routekit._internal.types import HandlerRef
from routekit.errors import CallbackNotFound


def load_object(path: str) -> Any:
    """Import ``"pkg.module:attr"`` or ``"pkg.module.attr"``.

    Raises:
        ImportError: If no module in the path can be imported.
        AttributeError: If the attribute does not exist on the module.
    """
    module_path, sep, attr_path = path.partition(":")
    if not sep:
        module_path, _, attr_path = path.rpartition(".")
    if not module_path or not attr_path:
        msg = f"{path!r} is not a dotted import path"
        raise ImportError(msg)
    obj: Any = importlib.import_module(module_path)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)
    return obj


def find_controller(
    ref: str | type,
    controllers: Mapping[str, type],
    namespace: str = "",
) -> type | None:
    """Resolve *ref* to a class, or ``None`` if it can't be found."""
    if isinstance(ref, type):
        return ref
    if ref in controllers:
        return controllers[ref]
    candidates = [f"{namespace}.{ref}", ref] if namespace else [ref]
    for candidate in candidates:
        try:
            obj = load_object(candidate)
        except (ImportError, AttributeError):
            continue
        if isinstance(obj, type):
            return obj
    return None


def _bound_method(target: Any, action: str, reference: HandlerRef) -> Callable[..., Any]:
    if isinstance(target, type):
        target = target()
    method = getattr(target, action, None)
    if not callable(method):
        raise CallbackNotFound(reference, f"{type(target).__name__} has no method {action!r}")
    return method


def resolve_handler(
    reference: HandlerRef,
    controllers: Mapping[str, type] | None = None,
    namespace: str = "",
) -> Callable[..., Any]:
    """Turn *reference* into a callable, instantiating controllers as needed."""
    controllers = controllers or {}

    if isinstance(reference, str):
        class_ref, sep, action = reference.partition("@")
        if sep:
            cls = find_controller(class_ref, controllers, namespace)
            if cls is None:
                raise CallbackNotFound(reference, f"class {class_ref!r} not found")
            return _bound_method(cls, action or "index", reference)
        try:
            func = load_object(f"{namespace}.{reference}" if namespace else reference)
        except (ImportError, AttributeError) as exc:
            raise CallbackNotFound(reference, str(exc)) from exc
        if not callable(func):
            raise CallbackNotFound(reference, "not callable")
        return func

    if isinstance(reference, (tuple, list)) and len(reference) == 2 and isinstance(reference[1], str):
        target, action = reference
        if isinstance(target, str):
            cls = find_controller(target, controllers, namespace)
            if cls is None:
                raise CallbackNotFound(reference, f"class {target!r} not found")
            target = cls
        return _bound_method(target, action, reference)

    if callable(reference):
        return reference

    raise CallbackNotFound(reference)
