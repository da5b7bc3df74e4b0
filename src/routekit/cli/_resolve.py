"""Locate the App a CLI command operates on.

``"pkg.module:name"`` imports ``pkg.module`` and reads ``name``; a bare
``"pkg.module"`` reads ``app``. A callable that is not an App is treated
as a factory and called with no arguments.
"""

import importlib

from routekit.app import App

DEFAULT_ATTRIBUTE = "app"


def resolve_app(import_string: str) -> App:
    """Import *import_string* and return the App it names.

    Raises:
        ModuleNotFoundError: The module part cannot be imported.
        AttributeError: The module has no such attribute.
        TypeError: The attribute is neither an App nor a factory
            returning one, or the factory raised.
    """
    module_name, _, attribute = import_string.partition(":")
    target = getattr(importlib.import_module(module_name), attribute or DEFAULT_ATTRIBUTE)

    if not isinstance(target, App) and callable(target):
        try:
            target = target()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(target, App):
        return target
    msg = f"{import_string!r} resolved to {type(target).__name__}, not a routekit.App instance"
    raise TypeError(msg)
