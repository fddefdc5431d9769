"""Routing — route variants, URL generators, and manifest-ordered matching.

Routes are deserialized once from the build manifest and are immutable
afterwards; each carries a generator rebuilt from its path segments.
"""

from waymark.routing.generator import RouteGenerator, route_generator
from waymark.routing.route import (
    EndpointRoute,
    FallbackRoute,
    PageRoute,
    RedirectConfig,
    RedirectRoute,
    RouteData,
    RouteMatch,
    RoutePart,
)
from waymark.routing.router import Router

__all__ = [
    "EndpointRoute",
    "FallbackRoute",
    "PageRoute",
    "RedirectConfig",
    "RedirectRoute",
    "RouteData",
    "RouteGenerator",
    "RouteMatch",
    "RoutePart",
    "Router",
    "route_generator",
]
