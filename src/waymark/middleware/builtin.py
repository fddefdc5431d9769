"""Built-in middleware: the no-op pass-through and chain composition.

A build with no user middleware still runs requests through a
middleware slot. ``noop_middleware`` fills it: it forwards the request
and marks the response so the server can tell no user code ran.
"""

from collections.abc import Sequence

from waymark.http import Request, Response
from waymark.middleware.protocol import Middleware, Next

NOOP_MIDDLEWARE_HEADER = "X-Waymark-Noop"


async def noop_middleware(request: Request, next: Next) -> Response:
    """Forward *request* unchanged and tag the response."""
    response = await next(request)
    return response.with_header(NOOP_MIDDLEWARE_HEADER, "true")


def build_chain(middleware: Sequence[Middleware], endpoint: Next) -> Next:
    """Wrap *endpoint* in *middleware*, first item outermost."""
    handler = endpoint
    for mw in reversed(middleware):
        outer = handler

        async def make_next(req: Request, _mw: Middleware = mw, _next: Next = outer) -> Response:
            return await _mw(req, _next)

        handler = make_next
    return handler
