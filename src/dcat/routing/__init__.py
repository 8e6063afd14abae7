"""Routing — grouped route registration and named-route URL building.

Routes are registered during boot inside groups that carry the context's
route-name prefix, middleware binding, and domain.
"""

from dcat.routing.route import GroupAttributes, Route, RouteSource
from dcat.routing.router import Router, parse_path

__all__ = ["GroupAttributes", "Route", "RouteSource", "Router", "parse_path"]
