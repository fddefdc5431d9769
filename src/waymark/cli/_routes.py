"""``waymark routes`` — list manifest routes.

Prints a table of TYPE, ROUTE, and COMPONENT in manifest order.
"""

import argparse

from waymark.cli._resolve import resolve_manifest


def run_routes(args: argparse.Namespace) -> None:
    """List the routes of the manifest at ``args.manifest``."""
    manifest = resolve_manifest(args.manifest)

    routes = manifest.route_data
    if not routes:
        print("No routes in manifest.")
        return

    # Build rows: (type, route, component)
    rows: list[tuple[str, str, str]] = []
    for route in routes:
        component = route.component
        if route.prerender:
            component = f"{component} (prerendered)"
        rows.append((route.type, route.route, component))

    # Column widths
    max_type = max(max(len(r[0]) for r in rows), 4)  # "TYPE" header
    max_route = max(max(len(r[1]) for r in rows), 5)  # "ROUTE" header

    fmt = f"{{:<{max_type}}}  {{:<{max_route}}}  {{}}"
    print(fmt.format("TYPE", "ROUTE", "COMPONENT"))
    sep_len = max_type + max_route + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
