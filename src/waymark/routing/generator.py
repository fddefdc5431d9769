"""URL generators rebuilt from serialized path segments.

A generator is a closure over a route's immutable segments. Given a
parameter map it returns the concrete path::

    generate = route_generator(segments, "ignore")
    generate({"post": "hello"})  # -> "/blog/hello"
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from waymark.errors import MissingParameterError
from waymark.routing.params import Params, ParamValue, escape_path_text, sanitize_params, spread_key

if TYPE_CHECKING:
    from waymark.routing.route import RoutePart

type RouteGenerator = Callable[[Params], str]


def resolve_part(part: RoutePart, params: Params) -> str:
    """Resolve one part against already-sanitized *params*."""
    if part.spread:
        value = params.get(spread_key(part.content))
        if value is None or value == "":
            return ""
        return _as_text(value)
    if part.dynamic:
        value = params.get(part.content)
        # Dynamic segments can never be empty
        if value is None or value == "":
            raise MissingParameterError(part.content)
        return _as_text(value)
    return escape_path_text(part.content).replace("%5B", "[").replace("%5D", "]")


def resolve_segment(segment: Sequence[RoutePart], params: Params) -> str:
    """Join a segment's parts; non-empty results get a leading slash."""
    path = "".join(resolve_part(part, params) for part in segment)
    return "/" + path if path else ""


def route_generator(
    segments: Sequence[Sequence[RoutePart]],
    trailing_slash: str = "ignore",
) -> RouteGenerator:
    """Build the path generator for a route.

    With ``trailing_slash="always"`` a single ``/`` is appended whenever the
    route has at least one segment. An empty path falls back to ``/``.
    """
    captured = tuple(tuple(segment) for segment in segments)
    trailing = "/" if trailing_slash == "always" and captured else ""

    def generate(params: Params) -> str:
        sanitized = sanitize_params(params)
        path = "".join(resolve_segment(segment, sanitized) for segment in captured) + trailing
        return path or "/"

    return generate


def _as_text(value: ParamValue) -> str:
    return value if isinstance(value, str) else str(value)
