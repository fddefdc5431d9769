"""Immutable request and response types for the middleware pipeline.

Each ``Response.with_*()`` transformation returns a new Response.
Immutable by convention, built incrementally by design.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace


def _lookup(headers: tuple[tuple[str, str], ...], name: str) -> str | None:
    key = name.lower()
    for header, value in headers:
        if header.lower() == key:
            return value
    return None


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request: method, path, and headers only."""

    path: str = "/"
    method: str = "GET"
    headers: tuple[tuple[str, str], ...] = ()

    def header(self, name: str) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        return _lookup(self.headers, name)


@dataclass(frozen=True, slots=True)
class Response:
    """A response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    def header(self, name: str) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        return _lookup(self.headers, name)
