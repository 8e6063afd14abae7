"""Route, PathSegment and GroupAttributes definitions."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeAlias

from dcat.errors import ConfigurationError

# A route source is a callable taking the router, or a route file path
RouteSource: TypeAlias = Callable[..., Any] | str | Path

GROUP_KEYS: frozenset[str] = frozenset({"as", "domain", "middleware", "prefix"})


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route, with its group attributes already applied."""

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None
    middleware: tuple[str, ...] = ()
    domain: str | None = None


@dataclass(frozen=True, slots=True)
class GroupAttributes:
    """Attributes of one route group level.

    Built from the mapping passed to ``Router.group``. The ``as`` key is
    the route-name prefix (``"dcat.admin."``); ``middleware`` may be a
    single alias string or a sequence of them.
    """

    prefix: str = ""
    name_prefix: str = ""
    middleware: tuple[str, ...] = ()
    domain: str | None = None

    @classmethod
    def from_mapping(cls, attributes: Mapping[str, Any]) -> GroupAttributes:
        unknown = set(attributes) - GROUP_KEYS
        if unknown:
            msg = (
                f"Unknown route group attribute(s): {', '.join(sorted(unknown))}. "
                f"Allowed: {', '.join(sorted(GROUP_KEYS))}."
            )
            raise ConfigurationError(msg)

        middleware = attributes.get("middleware") or ()
        if isinstance(middleware, str):
            middleware = (middleware,)
        domain = attributes.get("domain")
        if domain is not None and not isinstance(domain, str):
            msg = f"Route group domain must be a string, got {type(domain).__name__}."
            raise ConfigurationError(msg)

        return cls(
            prefix=str(attributes.get("prefix") or "").strip("/"),
            name_prefix=str(attributes.get("as") or ""),
            middleware=tuple(middleware),
            domain=domain or None,
        )
