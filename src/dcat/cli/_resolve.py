"""Registry import resolution — resolves ``"module:attribute"`` strings.

Shared by ``dcat contexts`` and ``dcat routes``.
"""

import argparse
import importlib
import sys

from dcat.registry import ContextRegistry


def resolve_registry(import_string: str) -> ContextRegistry:
    """Resolve an import string to a ContextRegistry instance.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"registry"``. A callable that is not a
    registry is treated as a factory and called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ``ContextRegistry``.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "registry"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, ContextRegistry):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, ContextRegistry):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a dcat.ContextRegistry"
        raise TypeError(msg)

    return obj


def resolve_or_exit(args: argparse.Namespace) -> ContextRegistry:
    """Resolve ``args.registry``, printing the error and exiting 1 on failure."""
    try:
        return resolve_registry(args.registry)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
