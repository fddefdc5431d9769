"""Shared manifest loading for CLI commands."""

import sys

from waymark.errors import WaymarkError
from waymark.manifest import Manifest, load_manifest


def resolve_manifest(path: str) -> Manifest:
    """Load the manifest at *path* or exit with status 1."""
    try:
        return load_manifest(path)
    except WaymarkError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def parse_params(pairs: list[str]) -> dict[str, str]:
    """Parse ``name=value`` arguments; malformed pairs exit with status 2."""
    params: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            print(f"Error: expected name=value, got {pair!r}", file=sys.stderr)
            raise SystemExit(2)
        params[name] = value
    return params
