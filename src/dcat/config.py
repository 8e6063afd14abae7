"""Registry configuration.

RegistryConfig is a frozen dataclass — immutable after creation, IDE-autocompletable.
The naming constants here are what host applications key their route names,
middleware aliases, and settings on, so the defaults must not drift.
"""

from dataclasses import dataclass
from pathlib import Path

from dcat.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Context registry configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RegistryConfig(base_path="/srv/app", routes_file="admin/routes.py")
    """

    # Naming
    default_name: str = "admin"
    namespace: str = "dcat"  # Route alias prefix: "dcat.<name>."
    api_namespace: str = "dcat-api"  # API alias suffix: "dcat.<name>.dcat-api."

    # Settings keys
    apps_key: str = "admin.multi_app"  # Declared contexts: {name: enabled}
    active_slot: str = "admin"  # Where the active context's config is published

    # Middleware
    middleware_alias: str = "admin.app"  # Bound as "admin.app:<name>"

    # Route definition file, probed per context at boot
    base_path: str | Path = "."
    routes_file: str | Path = "app/Admin/routes.py"

    def __post_init__(self) -> None:
        if not self.default_name:
            msg = "RegistryConfig.default_name must not be empty."
            raise ConfigurationError(msg)
        if not self.namespace:
            msg = "RegistryConfig.namespace must not be empty."
            raise ConfigurationError(msg)

    @property
    def routes_path(self) -> Path:
        """Absolute-or-relative path of the route definition file."""
        return Path(self.base_path) / self.routes_file
