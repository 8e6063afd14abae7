"""dcat exception hierarchy.

Shared across the registry, router, and middleware so every module
raises and catches the same types.
"""


class DcatError(Exception):
    """Base for all dcat-specific errors."""


class ConfigurationError(DcatError):
    """Raised when registry, route, or group configuration is invalid.

    The registry itself never raises for lookups. This surfaces from
    collaborators (the router rejecting a malformed group, a bad
    ``RegistryConfig``) and propagates unchanged.
    """


class RouteNotFound(DcatError, LookupError):  # noqa: N818 — mirrors LookupError naming
    """No route is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Route {name!r} is not defined.")
