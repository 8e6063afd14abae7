"""Context registry — which application contexts exist and which is active.

One host process serves several independently configured contexts
(``admin``, ``tenant_a``, ...) from one code base. The registry:

- reads the declared contexts once from settings (``admin.multi_app``),
- lazily caches each context's configuration mapping,
- switches the active context and publishes its configuration into the
  ``admin`` settings slot so the rest of the host sees it ambiently,
- derives route-name prefixes (``dcat.<name>.``) and middleware bindings
  (``admin.app:<name>``) and registers each context's routes at boot.

Lookups never raise: unknown contexts and missing keys degrade to empty
mappings or the supplied default. Router and route-file errors propagate.

Thread safety:
    The active name is held in a per-registry ``ContextVar``, so a switch
    made inside a request task stays local to that task. Setting the name
    and publishing its configuration happen under one ``RLock``. The
    published settings slot is process-wide and reflects the latest switch.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias

from dcat.config import RegistryConfig
from dcat.routing.route import RouteSource
from dcat.routing.router import Router
from dcat.settings import Key, Settings, data_get

if TYPE_CHECKING:
    from dcat.middleware.aliases import MiddlewareAliases

logger = logging.getLogger("dcat.registry")

ApiRoutes: TypeAlias = Callable[[Router], None]
FileProbe: TypeAlias = Callable[[Path], bool]


def _no_api_routes(router: Router) -> None:
    """Default API route callback. Registers nothing."""


def _is_file(path: Path) -> bool:
    return path.is_file()


class ContextRegistry:
    """Tracks declared contexts, the active context, and their configuration.

    Usage::

        settings = Settings({"admin": {"multi_app": {"tenant": True}}})
        registry = ContextRegistry(settings, Router())
        registry.boot()

        with registry.using("tenant"):
            registry.config("route.domain")
            registry.route_prefix()  # "dcat.tenant."

    Args:
        settings: The host's global settings store.
        router: Router that receives each context's route groups.
        config: Naming constants and the route file location.
        api_routes: Callback that registers the built-in API routes. It is
            loaded once per context, inside that context's route group.
        exists: File probe for the route definition file.

    The active name is local to the current thread or asyncio task. A
    ``switch()`` made in another thread or task, or inside ``asyncio.run()``,
    republishes the process-wide settings slot but does not change the
    caller's ``name``.
    """

    __slots__ = (
        "_active",
        "_api_routes",
        "_booted",
        "_configs",
        "_declared",
        "_exists",
        "_lock",
        "options",
        "router",
        "settings",
    )

    def __init__(
        self,
        settings: Settings,
        router: Router,
        *,
        config: RegistryConfig | None = None,
        api_routes: ApiRoutes | None = None,
        exists: FileProbe | None = None,
    ) -> None:
        self.settings = settings
        self.router = router
        self.options: RegistryConfig = config or RegistryConfig()
        self._api_routes: ApiRoutes = api_routes or _no_api_routes
        self._exists: FileProbe = exists or _is_file
        self._declared: Mapping[str, bool] | None = None
        self._configs: dict[str, dict[str, Any]] = {}
        self._active: ContextVar[str | None] = ContextVar(
            f"dcat_active_context_{id(self)}", default=None
        )
        self._lock = threading.RLock()
        self._booted = False

    # -- Declared contexts --

    def declared_contexts(self) -> Mapping[str, bool]:
        """All declared contexts and their enabled flags.

        Read from settings on first call and memoized; later changes to
        the settings are not seen. Flags are normalized by truthiness.
        """
        if self._declared is None:
            raw = self.settings.get(self.options.apps_key)
            declared = (
                {str(name): bool(flag) for name, flag in raw.items()}
                if isinstance(raw, Mapping)
                else {}
            )
            self._declared = MappingProxyType(declared)
        return self._declared

    def enabled_contexts(self) -> dict[str, bool]:
        """Declared contexts whose flag is set."""
        return {name: flag for name, flag in self.declared_contexts().items() if flag}

    def is_declared(self, name: str) -> bool:
        """Whether *name* is readable: declared, or the default context."""
        return name == self.options.default_name or name in self.declared_contexts()

    # -- Active context --

    @property
    def name(self) -> str:
        """The active context name. Never empty."""
        return self._active.get() or self.options.default_name

    def switch(self, name: str | None = None) -> None:
        """Make *name* the active context and publish its configuration.

        An empty or omitted name selects the default context. Switching is
        last-write-wins; use ``using()`` for scoped switches.
        """
        with self._lock:
            self._active.set(name or None)
            self._publish(self.name)
        logger.debug("Switched active context to %r", self.name)

    @contextmanager
    def using(self, name: str | None) -> Iterator[ContextRegistry]:
        """Switch to *name* for the duration of the block.

        The previously active context is restored on exit, including when
        the block raises.
        """
        previous = self._active.get()
        self.switch(name)
        try:
            yield self
        finally:
            self.switch(previous)

    def _publish(self, name: str) -> None:
        # Declarations live under the slot; read them before it is overwritten.
        self.declared_contexts()
        slot = self.options.active_slot
        self._cached(slot)
        self.settings.set(slot, dict(self._cached(name)))

    # -- Configuration --

    def _cached(self, name: str) -> dict[str, Any]:
        if name not in self._configs:
            value = self.settings.get(name)
            self._configs[name] = dict(value) if isinstance(value, Mapping) else {}
        return self._configs[name]

    def context_configs(self, name: str) -> dict[str, Any]:
        """The full configuration of *name*, or ``{}`` if it is not declared."""
        if not self.is_declared(name):
            return {}
        return self._cached(name)

    def config(self, key: Key | None, default: Any = None) -> Any:
        """Look up *key* in the active context's configuration."""
        return self.context_config(self.name, key, default)

    def context_config(self, name: str, key: Key | None, default: Any = None) -> Any:
        """Look up *key* in the configuration of context *name*.

        Returns *default* when *name* is not declared or any path segment
        is missing.
        """
        return data_get(self.context_configs(name), key, default)

    def replace_config(self, values: Mapping[str, Any]) -> None:
        """Replace the active context's configuration wholesale."""
        self.replace_context_config(self.name, values)

    def replace_context_config(self, name: str, values: Mapping[str, Any]) -> None:
        """Replace the configuration of context *name* wholesale.

        Writes are accepted for any name, declared or not; only reads are
        gated by declaration. The active slot keeps holding the active
        context's configuration: replacing the context that shares the
        slot's name while another context is active only updates the cache.
        """
        with self._lock:
            data = dict(values)
            if name != self.options.active_slot:
                self.settings.set(name, data)
            self._configs[name] = data
            self._publish(self.name)

    # -- Naming --

    def route_prefix(self, name: str | None = None) -> str:
        """Route-name prefix for *name*, or the active context: ``dcat.<name>.``."""
        return f"{self.options.namespace}.{name or self.name}."

    def api_route_prefix(self, name: str | None = None) -> str:
        """API route-name prefix: ``dcat.<name>.dcat-api.``."""
        return f"{self.route_prefix(name)}{self.options.api_namespace}."

    def current_api_route_prefix(self) -> str:
        return self.api_route_prefix(self.name)

    def middleware_binding(self, name: str | None = None) -> str:
        """Middleware alias bound to *name*: ``admin.app:<name>``."""
        return f"{self.options.middleware_alias}:{name or self.name}"

    def route(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        *,
        absolute: bool = True,
    ) -> str:
        """URL of route *name* inside the active context.

        ``registry.route("users.index")`` resolves ``dcat.<active>.users.index``.
        Raises ``RouteNotFound`` if the router has no such route.
        """
        return self.router.url_for(self.route_prefix() + name, params, absolute=absolute)

    # -- Route registration --

    def group_attributes(self, name: str | None = None) -> dict[str, Any]:
        """Route group attributes for context *name*, with empty values dropped."""
        name = name or self.name
        if name == self.options.active_slot:
            # The slot holds the active context; use this context's own copy.
            domain = data_get(self._cached(name), "route.domain")
        else:
            domain = self.settings.get(f"{name}.route.domain")
        attributes = {
            "middleware": self.middleware_binding(name),
            "domain": domain,
            "as": self.route_prefix(name),
        }
        return {key: value for key, value in attributes.items() if value}

    def load_routes(self, source: RouteSource, name: str | None = None) -> None:
        """Register *source* inside the route group of context *name*."""
        self.router.group(self.group_attributes(name), source)

    def register_context(self, name: str | None = None) -> None:
        """Switch to *name* and register its API routes and route file."""
        self.switch(name)
        name = self.name

        self.load_routes(self._api_routes, name)

        routes_path = self.options.routes_path
        if self._exists(routes_path):
            self.load_routes(routes_path, name)
        logger.info("Registered routes for context %r", name)

    def boot(self) -> None:
        """Register the default context, then every enabled declared context.

        Leaves the default context active. Calling ``boot()`` again is a
        no-op.
        """
        if self._booted:
            return

        default = self.options.default_name
        self.register_context(default)

        if self.declared_contexts():
            for name in self.enabled_contexts():
                self.register_context(name)

        self.switch(default)
        self._booted = True
        logger.info(
            "Booted %d context(s): %s",
            1 + len(self.enabled_contexts()),
            ", ".join([default, *self.enabled_contexts()]),
        )

    @property
    def booted(self) -> bool:
        return self._booted

    def routes(self, source: RouteSource) -> None:
        """Register *source* under the default context and every enabled one.

        The default context is active again afterwards.
        """
        default = self.options.default_name
        self.load_routes(source, default)

        if self.declared_contexts():
            for name in self.enabled_contexts():
                self.switch(name)
                self.load_routes(source, name)

            self.switch(default)

    # -- Middleware --

    def middleware_aliases(self) -> MiddlewareAliases:
        """Alias table binding ``admin.app`` to this registry's context middleware."""
        from dcat.middleware.aliases import MiddlewareAliases
        from dcat.middleware.context import ContextMiddleware

        aliases = MiddlewareAliases()
        aliases.register(
            self.options.middleware_alias,
            lambda name=None: ContextMiddleware(self, name),
        )
        return aliases

    def __repr__(self) -> str:
        declared = sorted(self.declared_contexts())
        return f"<ContextRegistry active={self.name!r} declared={declared!r}>"
