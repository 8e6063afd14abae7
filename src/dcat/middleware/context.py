"""Context middleware — runs a request inside one application context.

Routes registered under a context carry the binding ``admin.app:<name>``.
Resolving that alias yields a ``ContextMiddleware`` that switches the
registry for the duration of the downstream call, so handlers see the
context's configuration and route prefix.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dcat.middleware.protocol import Next

if TYPE_CHECKING:
    from dcat.registry import ContextRegistry


class ContextMiddleware:
    """Switch *registry* to *name* while the request is handled.

    The previous context is restored when the downstream call returns or
    raises. An empty *name* selects the default context.
    """

    __slots__ = ("name", "registry")

    def __init__(self, registry: ContextRegistry, name: str | None = None) -> None:
        self.registry = registry
        self.name = name or None

    async def __call__(self, request: Any, next: Next) -> Any:
        with self.registry.using(self.name):
            return await next(request)

    def __repr__(self) -> str:
        return f"<ContextMiddleware {self.name or self.registry.options.default_name!r}>"
