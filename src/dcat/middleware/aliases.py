"""Middleware aliases — ``"alias:arg1,arg2"`` strings to middleware instances.

Route groups store middleware as alias strings so they can be declared
before any middleware object exists. The host pipeline resolves them
per route::

    aliases = registry.middleware_aliases()
    mw = aliases.resolve("admin.app:tenant")   # ContextMiddleware(registry, "tenant")
"""

import threading
from collections.abc import Callable
from typing import TypeAlias

from dcat.errors import ConfigurationError
from dcat.middleware.protocol import Middleware

MiddlewareFactory: TypeAlias = Callable[..., Middleware]


def parse_binding(binding: str) -> tuple[str, tuple[str, ...]]:
    """Split ``"alias:a,b"`` into ``("alias", ("a", "b"))``.

    ``"alias"`` and ``"alias:"`` both yield no arguments.
    """
    alias, _, raw_args = binding.partition(":")
    args = tuple(arg.strip() for arg in raw_args.split(",")) if raw_args else ()
    return alias.strip(), args


class MiddlewareAliases:
    """Thread-safe alias table.

    Factories receive the alias arguments positionally.
    """

    __slots__ = ("_factories", "_lock")

    def __init__(self) -> None:
        self._factories: dict[str, MiddlewareFactory] = {}
        self._lock = threading.Lock()

    def register(self, alias: str, factory: MiddlewareFactory) -> None:
        """Bind *alias* to *factory*, replacing any previous binding."""
        with self._lock:
            self._factories[alias] = factory

    def __contains__(self, alias: object) -> bool:
        return alias in self._factories

    def resolve(self, binding: str) -> Middleware:
        """Build the middleware for *binding*.

        Raises ``ConfigurationError`` if the alias is not registered.
        """
        alias, args = parse_binding(binding)
        with self._lock:
            factory = self._factories.get(alias)
        if factory is None:
            msg = f"Unknown middleware alias {alias!r} in {binding!r}."
            raise ConfigurationError(msg)
        return factory(*args)

    def resolve_all(self, bindings: tuple[str, ...]) -> list[Middleware]:
        """Resolve every binding of a route, outermost first."""
        return [self.resolve(binding) for binding in bindings]
