"""Manifest router — regex matching in manifest order.

Routes arrive already ordered by priority and each carries the compiled
pattern the build produced, so matching is a linear scan: the first
pattern that matches the decoded pathname wins.
"""

import logging
import re
from collections.abc import Iterable, Iterator
from urllib.parse import unquote

from waymark.errors import NotFound
from waymark.routing.params import Params, spread_key
from waymark.routing.route import RouteData, RouteMatch

logger = logging.getLogger("waymark.routing")

# Escapes of URI-reserved characters: # $ & + , / : ; = ? @
_RESERVED_ESCAPE = re.compile(r"(%(?:2[346BCF]|3[ABDF]|40))", re.IGNORECASE)


def decode_path(pathname: str) -> str:
    """Percent-decode a request path, keeping reserved escapes intact.

    ``/blog/caf%C3%A9`` decodes to ``/blog/café`` but ``/blog/a%2Fb``
    stays as-is, so an encoded slash never splits a segment.
    """
    pieces = _RESERVED_ESCAPE.split(pathname)
    # Odd indices are the captured reserved escapes
    return "".join(piece if index % 2 else unquote(piece) for index, piece in enumerate(pieces))


def get_params(route: RouteData, match: re.Match[str]) -> dict[str, str | None]:
    """Map captured groups onto the route's declared parameter names.

    Spread names (``...slug``) lose their marker; groups that did not
    participate in the match are ``None``.
    """
    params: dict[str, str | None] = {}
    groups = match.groups()
    for index, name in enumerate(route.params):
        value = groups[index] if index < len(groups) else None
        key = spread_key(name) if name.startswith("...") else name
        params[key] = value or None
    return params


class Router:
    """Route lookup over a manifest's routes.

    Usage::

        router = manifest.router()
        match = router.match("/blog/hello")
        router.url_for("/blog/[post]", {"post": "hello"})
    """

    __slots__ = ("_by_route", "_routes")

    def __init__(self, routes: Iterable[RouteData]) -> None:
        self._routes = tuple(routes)
        self._by_route: dict[str, RouteData] = {}
        for route in self._routes:
            # Earlier routes win on duplicate route strings
            self._by_route.setdefault(route.route, route)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[RouteData]:
        return iter(self._routes)

    @property
    def routes(self) -> tuple[RouteData, ...]:
        """All routes in priority order."""
        return self._routes

    def get(self, route: str) -> RouteData:
        """Return the route declared as *route* (e.g. ``"/blog/[post]"``).

        Raises ``NotFound`` if no route has that declaration.
        """
        try:
            return self._by_route[route]
        except KeyError:
            raise NotFound(f"No route declared as {route!r}") from None

    def url_for(self, route: str, params: Params | None = None) -> str:
        """Generate the path for the route declared as *route*."""
        return self.get(route).generate(params or {})

    def match(self, pathname: str) -> RouteMatch:
        """Match a request path against the routes.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        """
        for route_match in self._iter_matches(pathname):
            return route_match
        raise NotFound(f"No route matches {pathname!r}")

    def match_all(self, pathname: str) -> list[RouteMatch]:
        """Return every matching route, highest priority first."""
        return list(self._iter_matches(pathname))

    def _iter_matches(self, pathname: str) -> Iterator[RouteMatch]:
        decoded = decode_path(pathname)
        for route in self._routes:
            found = route.pattern.match(decoded)
            if found is None:
                continue
            logger.debug("Matched %s -> %s", pathname, route.route)
            yield RouteMatch(route=route, params=get_params(route, found))
