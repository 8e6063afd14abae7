"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request, next: Next) -> response

Provided:
    ContextMiddleware -- Run the request inside one application context
    MiddlewareAliases -- Resolve ``"alias:args"`` bindings stored on routes
"""

from dcat.middleware.aliases import MiddlewareAliases, parse_binding
from dcat.middleware.context import ContextMiddleware
from dcat.middleware.protocol import Middleware, Next

__all__ = [
    "ContextMiddleware",
    "Middleware",
    "MiddlewareAliases",
    "Next",
    "parse_binding",
]
