"""Route data variants and RouteMatch frozen dataclasses.

Every route in a manifest is exactly one of four variants::

    PageRoute      rendered page (``.astro``, ``.mdx``, ...)
    EndpointRoute  code endpoint returning a response
    RedirectRoute  redirect to a destination or another route
    FallbackRoute  i18n fallback for a page in another locale

The variant is fixed at construction and each variant's required fields
are enforced by its dataclass signature.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import ClassVar, Literal

from waymark.config import TrailingSlash
from waymark.routing.generator import RouteGenerator, route_generator
from waymark.routing.params import Params

type RouteType = Literal["page", "endpoint", "redirect", "fallback"]
type RouteOrigin = Literal["internal", "external", "project"]


@dataclass(frozen=True, slots=True)
class RoutePart:
    """One piece of a path segment.

    Literal:  ``RoutePart("blog")``
    Dynamic:  ``RoutePart("post", dynamic=True)``
    Spread:   ``RoutePart("...slug", dynamic=True, spread=True)``
    """

    content: str
    dynamic: bool = False
    spread: bool = False


type Segment = tuple[RoutePart, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class RouteData:
    """Fields shared by every route variant.

    ``generate`` is rebuilt from ``segments`` at construction, so the
    generator can never disagree with the segments it was built from.
    """

    type: ClassVar[RouteType]

    route: str
    component: str
    pattern: re.Pattern[str]
    segments: tuple[Segment, ...] = ()
    params: tuple[str, ...] = ()
    pathname: str | None = None
    prerender: bool = False
    is_index: bool = False
    origin: RouteOrigin = "project"
    trailing_slash: TrailingSlash = "ignore"
    fallback_routes: tuple[RouteData, ...] = ()
    generate: RouteGenerator = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "generate", route_generator(self.segments, self.trailing_slash))

    @property
    def is_dynamic(self) -> bool:
        """True if any part of the path is a parameter."""
        return any(part.dynamic or part.spread for segment in self.segments for part in segment)

    def url(self, params: Params | None = None) -> str:
        """Generate this route's path; *params* defaults to empty."""
        return self.generate(params or {})


@dataclass(frozen=True, slots=True, kw_only=True)
class PageRoute(RouteData):
    """A rendered page."""

    type: ClassVar[RouteType] = "page"


@dataclass(frozen=True, slots=True, kw_only=True)
class EndpointRoute(RouteData):
    """A code endpoint (``.ts``/``.js`` page module)."""

    type: ClassVar[RouteType] = "endpoint"


@dataclass(frozen=True, slots=True)
class RedirectConfig:
    """Redirect with an explicit status code."""

    status: int
    destination: str


@dataclass(frozen=True, slots=True, kw_only=True)
class RedirectRoute(RouteData):
    """A configured redirect.

    ``redirect`` is either a destination string or a ``RedirectConfig``.
    ``redirect_route`` is set when the destination is itself a route in
    the same manifest.
    """

    type: ClassVar[RouteType] = "redirect"

    redirect: str | RedirectConfig
    redirect_route: RouteData | None = None

    @property
    def destination(self) -> str:
        if isinstance(self.redirect, RedirectConfig):
            return self.redirect.destination
        return self.redirect


@dataclass(frozen=True, slots=True, kw_only=True)
class FallbackRoute(RouteData):
    """An i18n fallback route."""

    type: ClassVar[RouteType] = "fallback"


ROUTE_TYPES: dict[str, type[RouteData]] = {
    cls.type: cls for cls in (PageRoute, EndpointRoute, RedirectRoute, FallbackRoute)
}


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: RouteData
    params: dict[str, str | None]
