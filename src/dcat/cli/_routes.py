"""``dcat routes`` — list registered routes.

Boots the registry if needed and prints every route with its name,
methods, path, middleware bindings, and domain.
"""

import argparse
import sys

from dcat.cli._resolve import resolve_or_exit


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes, optionally filtered to one context."""
    registry = resolve_or_exit(args)

    if not registry.booted:
        registry.boot()

    routes = registry.router.routes
    if args.context:
        binding = registry.middleware_binding(args.context)
        routes = [r for r in routes if binding in r.middleware]

    if not routes:
        print("No routes registered.", file=sys.stderr)
        return

    rows: list[tuple[str, str, str, str, str]] = []
    for route in routes:
        rows.append(
            (
                route.name or "-",
                ", ".join(sorted(route.methods)),
                route.path,
                ", ".join(route.middleware) or "-",
                route.domain or "-",
            )
        )

    headers = ("NAME", "METHOD", "PATH", "MIDDLEWARE", "DOMAIN")
    widths = [max(len(headers[i]), *(len(r[i]) for r in rows)) for i in range(4)]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths) + "  {}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 8 + 6, 100))
    for row in rows:
        print(fmt.format(*row))
