"""Site configuration.

SiteConfig is a frozen dataclass — immutable after creation, built once
when the manifest loads and passed to whatever needs it. No process-wide
registry, no string-key dict lookups.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, get_args

from waymark.errors import ConfigurationError

type TrailingSlash = Literal["always", "never", "ignore"]
type BuildFormat = Literal["directory", "file", "preserve"]

TRAILING_SLASH_POLICIES: tuple[str, ...] = get_args(TrailingSlash.__value__)
BUILD_FORMATS: tuple[str, ...] = get_args(BuildFormat.__value__)


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SiteConfig(site="https://example.com", trailing_slash="always")
    """

    site: str | None = None
    base: str = "/"
    trailing_slash: TrailingSlash = "ignore"
    build_format: BuildFormat = "directory"
    compress_html: bool = True
    check_origin: bool = True
    adapter_name: str = ""

    def __post_init__(self) -> None:
        if self.trailing_slash not in TRAILING_SLASH_POLICIES:
            msg = (
                f"Invalid trailing_slash {self.trailing_slash!r}. "
                f"Expected one of: {', '.join(TRAILING_SLASH_POLICIES)}"
            )
            raise ConfigurationError(msg)
        if self.build_format not in BUILD_FORMATS:
            msg = (
                f"Invalid build_format {self.build_format!r}. "
                f"Expected one of: {', '.join(BUILD_FORMATS)}"
            )
            raise ConfigurationError(msg)

    @classmethod
    def from_manifest(cls, raw: Mapping[str, Any]) -> SiteConfig:
        """Build a config from the top-level keys of a serialized manifest."""
        return cls(
            site=raw.get("site") or None,
            base=raw.get("base", "/"),
            trailing_slash=raw.get("trailingSlash", "ignore"),
            build_format=raw.get("buildFormat", "directory"),
            compress_html=raw.get("compressHTML", True),
            check_origin=raw.get("checkOrigin", True),
            adapter_name=raw.get("adapterName", ""),
        )

    def join_base(self, path: str) -> str:
        """Join ``base`` and a route path without doubling slashes.

        ``SiteConfig(base="/docs").join_base("/intro")`` -> ``"/docs/intro"``
        """
        base = self.base.rstrip("/")
        if not path.startswith("/"):
            path = "/" + path
        return base + path

    def remove_base(self, path: str) -> str:
        """Strip ``base`` from a request path so it can be matched.

        ``SiteConfig(base="/docs").remove_base("/docs/intro")`` -> ``"/intro"``.
        Paths outside ``base`` come back unchanged.
        """
        base = self.base.rstrip("/")
        if not base:
            return path
        if path == base:
            return "/"
        if path.startswith(base + "/"):
            return path[len(base) :]
        return path

    def absolute_url(self, path: str) -> str:
        """Return the absolute URL for a route path under ``site`` and ``base``."""
        if not self.site:
            msg = "An absolute URL needs 'site' to be configured."
            raise ConfigurationError(msg)
        return self.site.rstrip("/") + self.join_base(path)
