"""Waymark CLI — inspect a build manifest, generate paths, write sitemaps.

Entry point registered as ``waymark`` in ``pyproject.toml``::

    [project.scripts]
    waymark = "waymark.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waymark`` command."""
    parser = argparse.ArgumentParser(
        prog="waymark",
        description="Waymark — route manifests, URL generators, and sitemaps.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # -- waymark routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List manifest routes")
    routes_parser.add_argument("manifest", help="Path to manifest .json or .mjs")

    # -- waymark generate -------------------------------------------------
    generate_parser = subparsers.add_parser("generate", help="Generate a path for a route")
    generate_parser.add_argument("manifest", help="Path to manifest .json or .mjs")
    generate_parser.add_argument("route", help="Route declaration (e.g. /blog/[post])")
    generate_parser.add_argument(
        "params",
        nargs="*",
        metavar="name=value",
        help="Route parameters",
    )

    # -- waymark match ----------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Match a path against the routes")
    match_parser.add_argument("manifest", help="Path to manifest .json or .mjs")
    match_parser.add_argument("path", help="Request path (e.g. /blog/hello)")

    # -- waymark sitemap --------------------------------------------------
    sitemap_parser = subparsers.add_parser("sitemap", help="Write sitemap files")
    sitemap_parser.add_argument("manifest", help="Path to manifest .json or .mjs")
    sitemap_parser.add_argument("--out", required=True, help="Output directory")
    sitemap_parser.add_argument(
        "--paths",
        default=None,
        help="JSON file mapping dynamic routes to lists of parameter objects",
    )
    sitemap_parser.add_argument("--site", default=None, help="Override the site URL")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "routes":
        from waymark.cli._routes import run_routes

        run_routes(args)
    elif args.command == "generate":
        from waymark.cli._generate import run_generate

        run_generate(args)
    elif args.command == "match":
        from waymark.cli._generate import run_match

        run_match(args)
    elif args.command == "sitemap":
        from waymark.cli._sitemap import run_sitemap

        run_sitemap(args)
