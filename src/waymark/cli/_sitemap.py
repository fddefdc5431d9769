"""``waymark sitemap`` — write sitemap files for a manifest."""

import argparse
import json
import sys
from pathlib import Path

from waymark.cli._resolve import resolve_manifest
from waymark.errors import ConfigurationError, MissingParameterError
from waymark.sitemap import write_sitemaps


def run_sitemap(args: argparse.Namespace) -> None:
    """Write ``sitemap-*.xml`` and ``sitemap-index.xml`` into ``args.out``.

    ``--paths`` names a JSON file shaped like::

        {"/blog/[post]": [{"post": "hello"}, {"post": "world"}]}
    """
    manifest = resolve_manifest(args.manifest)

    static_paths = None
    if args.paths:
        try:
            static_paths = json.loads(Path(args.paths).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            print(f"Error: cannot read static paths from {args.paths}: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc

    try:
        written = write_sitemaps(manifest, args.out, static_paths, site=args.site)
    except (ConfigurationError, MissingParameterError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    for path in written:
        print(path)
