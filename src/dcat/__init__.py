"""dcat — run several independently configured application contexts in one process.

Each context has its own configuration namespace, route-name prefix
(``dcat.<name>.``) and middleware binding (``admin.app:<name>``), while
sharing one code base.

Basic usage::

    from dcat import ContextRegistry, Router, Settings

    settings = Settings({
        "admin": {"multi_app": {"tenant": True}},
        "tenant": {"route": {"domain": "tenant.example.com"}},
    })
    registry = ContextRegistry(settings, Router())
    registry.boot()

    with registry.using("tenant"):
        registry.config("route.domain")  # "tenant.example.com"
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "ContextMiddleware",
    "ContextRegistry",
    "DcatError",
    "Middleware",
    "MiddlewareAliases",
    "Next",
    "RegistryConfig",
    "Route",
    "RouteNotFound",
    "Router",
    "Settings",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import dcat`` fast while providing a clean top-level API.
    """
    if name == "ContextRegistry":
        from dcat.registry import ContextRegistry

        return ContextRegistry

    if name == "RegistryConfig":
        from dcat.config import RegistryConfig

        return RegistryConfig

    if name == "Settings":
        from dcat.settings import Settings

        return Settings

    if name in ("Route", "Router"):
        from dcat import routing as _routing

        return getattr(_routing, name)

    if name in ("ContextMiddleware", "Middleware", "MiddlewareAliases", "Next"):
        from dcat import middleware as _mw

        return getattr(_mw, name)

    if name in ("ConfigurationError", "DcatError", "RouteNotFound"):
        from dcat import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
