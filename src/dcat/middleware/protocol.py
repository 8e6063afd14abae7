"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request, next: Next) -> Any: ...

No base class required. The pipeline that runs middleware belongs to the
host framework; dcat only needs the shape to bind contexts to requests.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeAlias

# The next handler in the middleware chain
Next: TypeAlias = Callable[[Any], Awaitable[Any]]


class Middleware(Protocol):
    """Protocol for dcat middleware.

    Accepts both functions and callable objects::

        async def tagging(request, next: Next):
            response = await next(request)
            return response

        class ContextSwitch:
            async def __call__(self, request, next: Next): ...
    """

    async def __call__(self, request: Any, next: Next) -> Any: ...
