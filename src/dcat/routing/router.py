"""Route registration with nested groups and named-route URL building.

Routes are registered during boot, inside ``group()`` calls that apply a
path prefix, a route-name prefix, middleware aliases, and a domain to
everything the group's source registers.
"""

import importlib.util
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlencode, urlsplit

from dcat.errors import ConfigurationError, RouteNotFound
from dcat.routing.params import format_param
from dcat.routing.route import GroupAttributes, PathSegment, Route, RouteSource

logger = logging.getLogger("dcat.routing")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}" -> [PathSegment("{id:int}", is_param=True, param_type="int")]

    Raises ``ConfigurationError`` for Flask-style ``<param>`` segments.
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route path {path!r} uses <param> syntax. "
                "Use {param} or {param:type} instead."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def _join(*parts: str) -> str:
    joined = "/".join(p.strip("/") for p in parts if p.strip("/"))
    return "/" + joined


class Router:
    """Route table with group stacking.

    Usage::

        router = Router()

        def admin_routes(r: Router) -> None:
            r.add("/users", list_users, name="users.index")

        router.group({"prefix": "admin", "as": "dcat.admin."}, admin_routes)
        router.url_for("dcat.admin.users.index")  # "http://localhost/admin/users"

    Route files are plain Python modules executed with ``router`` injected
    into their namespace.
    """

    __slots__ = ("_compiled", "_groups", "_named", "_routes", "base_url")

    def __init__(self, base_url: str = "http://localhost") -> None:
        self.base_url = base_url.rstrip("/")
        self._routes: list[Route] = []
        self._named: dict[str, Route] = {}
        self._groups: list[GroupAttributes] = []
        self._compiled = False

    # -- Registration --

    def add(
        self,
        path: str,
        handler: Callable[..., Any],
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Route:
        """Register a route under the current group stack."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        parse_path(path)  # reject malformed paths at registration time

        prefixes = [g.prefix for g in self._groups]
        middleware: list[str] = []
        domain: str | None = None
        name_prefix = ""
        for group in self._groups:
            middleware.extend(group.middleware)
            name_prefix += group.name_prefix
            if group.domain is not None:
                domain = group.domain

        route = Route(
            path=_join(*prefixes, path),
            handler=handler,
            methods=frozenset(m.upper() for m in (methods or ["GET"])),
            name=f"{name_prefix}{name}" if name else None,
            middleware=tuple(middleware),
            domain=domain,
        )
        self._routes.append(route)
        if route.name:
            self._named[route.name] = route
        logger.debug("Registered %s %s as %s", sorted(route.methods), route.path, route.name)
        return route

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a route handler via decorator."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add(path, func, methods=methods, name=name)
            return func

        return decorator

    def group(self, attributes: Mapping[str, Any], source: RouteSource) -> None:
        """Load *source* with *attributes* applied to every route it adds.

        Raises ``ConfigurationError`` for unknown attribute keys. Errors
        raised by the source propagate after the group is popped.
        """
        self._groups.append(GroupAttributes.from_mapping(attributes))
        try:
            self.load(source)
        finally:
            self._groups.pop()

    def load(self, source: RouteSource) -> None:
        """Run a route source: call it with the router, or execute a route file."""
        if callable(source):
            source(self)
            return
        self._load_file(Path(source))

    def _load_file(self, path: Path) -> None:
        module_name = f"dcat_routes_{path.stem}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            msg = f"Cannot load route file {str(path)!r}."
            raise ConfigurationError(msg)
        module = importlib.util.module_from_spec(spec)
        module.router = self  # type: ignore[attr-defined]
        logger.debug("Loading route file %s", path)
        spec.loader.exec_module(module)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._routes)

    def has(self, name: str) -> bool:
        return name in self._named

    def get(self, name: str) -> Route:
        """Return the route registered under *name*.

        The most recent registration wins when a name is reused.
        """
        try:
            return self._named[name]
        except KeyError:
            raise RouteNotFound(name) from None

    # -- URL building --

    def url_for(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        *,
        absolute: bool = True,
    ) -> str:
        """Build the URL of a named route.

        Path parameters are substituted from *params*; leftover params are
        appended as a query string. Absolute URLs use the route's domain
        when it has one, otherwise ``base_url``.
        """
        route = self.get(name)
        remaining = dict(params or {})

        parts: list[str] = []
        for segment in parse_path(route.path):
            if not segment.is_param:
                parts.append(segment.value)
                continue
            param_name = segment.param_name or ""
            if param_name not in remaining:
                msg = f"Missing parameter {param_name!r} for route {name!r}."
                raise ConfigurationError(msg)
            parts.append(format_param(param_name, remaining.pop(param_name), segment.param_type))

        url = "/" + "/".join(parts)
        if remaining:
            url = f"{url}?{urlencode(remaining)}"
        if not absolute:
            return url
        if route.domain:
            scheme = urlsplit(self.base_url).scheme or "http"
            return f"{scheme}://{route.domain}{url}"
        return f"{self.base_url}{url}"
