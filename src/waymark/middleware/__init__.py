"""Middleware — protocol, the no-op pass-through, and chain composition."""

from waymark.middleware.builtin import NOOP_MIDDLEWARE_HEADER, build_chain, noop_middleware
from waymark.middleware.protocol import Middleware, Next

__all__ = [
    "NOOP_MIDDLEWARE_HEADER",
    "Middleware",
    "Next",
    "build_chain",
    "noop_middleware",
]
