"""``waymark generate`` and ``waymark match`` — forward and reverse routing."""

import argparse
import sys

from waymark.cli._resolve import parse_params, resolve_manifest
from waymark.errors import MissingParameterError, NotFound


def run_generate(args: argparse.Namespace) -> None:
    """Print the path for ``args.route`` with ``args.params`` substituted."""
    router = resolve_manifest(args.manifest).router()
    params = parse_params(args.params)
    try:
        print(router.url_for(args.route, params))
    except (MissingParameterError, NotFound) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def run_match(args: argparse.Namespace) -> None:
    """Print the route matching ``args.path`` and its parameters."""
    router = resolve_manifest(args.manifest).router()
    try:
        match = router.match(args.path)
    except NotFound as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"{match.route.type} {match.route.route} ({match.route.component})")
    for name, value in match.params.items():
        print(f"  {name} = {value if value is not None else '(none)'}")
