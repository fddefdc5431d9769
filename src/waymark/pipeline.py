"""Request dispatch over a manifest: middleware, matching, redirects.

Rendering itself belongs to the caller. ``dispatch`` matches the request,
answers redirect routes directly, and hands everything else to the
``render`` callable, all inside the manifest's middleware chain.
"""

import logging
import re
from collections.abc import Awaitable, Callable, Mapping, Sequence

from waymark.errors import NotFound
from waymark.http import Request, Response
from waymark.manifest import Manifest
from waymark.middleware import Middleware, build_chain
from waymark.routing.params import ParamValue, escape_path_text
from waymark.routing.route import RedirectConfig, RedirectRoute, RouteMatch

logger = logging.getLogger("waymark.pipeline")

type Renderer = Callable[[RouteMatch, Request], Awaitable[Response]]

# [name] or [...name] placeholders in a redirect destination
_PLACEHOLDER = re.compile(r"\[(?:\.\.\.)?([^\[\]/]+)\]")


def redirect_status(route: RedirectRoute, method: str = "GET") -> int:
    """Status code for a redirect route.

    An explicit ``{status, destination}`` redirect keeps its status;
    otherwise ``GET`` gets 301 and every other method 308 so the body
    is replayed.
    """
    if isinstance(route.redirect, RedirectConfig):
        return route.redirect.status
    return 301 if method.upper() == "GET" else 308


def redirect_target(route: RedirectRoute, params: Mapping[str, ParamValue]) -> str:
    """Location for a redirect route, with *params* substituted."""
    if route.redirect_route is not None:
        return route.redirect_route.generate(params)

    def substitute(found: re.Match[str]) -> str:
        value = params.get(found.group(1))
        if value is None:
            return ""
        return escape_path_text(value) if isinstance(value, str) else str(value)

    target = _PLACEHOLDER.sub(substitute, route.destination)
    # An absent spread collapses to an empty segment
    if target.startswith("/"):
        target = re.sub(r"/{2,}", "/", target)
    return target


async def dispatch(
    manifest: Manifest,
    request: Request,
    render: Renderer,
    middleware: Sequence[Middleware] = (),
) -> Response:
    """Run *request* through the manifest's middleware and route it.

    The configured ``base`` is stripped before matching. Unmatched paths
    produce a 404 response.
    """
    router = manifest.router()

    async def endpoint(req: Request) -> Response:
        try:
            match = router.match(manifest.config.remove_base(req.path))
        except NotFound as exc:
            logger.debug("No route for %s %s", req.method, req.path)
            return Response(body=exc.detail, status=exc.status, content_type="text/plain; charset=utf-8")

        route = match.route
        if isinstance(route, RedirectRoute):
            location = redirect_target(route, match.params)
            status = redirect_status(route, req.method)
            logger.debug("Redirect %s -> %s (%d)", req.path, location, status)
            return Response(status=status).with_header("Location", location)

        return await render(match, req)

    chain = build_chain((manifest.middleware(), *middleware), endpoint)
    return await chain(request)
