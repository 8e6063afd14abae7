"""dcat CLI — inspect the contexts and routes of a host application.

Entry point registered as ``dcat`` in ``pyproject.toml``::

    [project.scripts]
    dcat = "dcat.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``dcat`` command."""
    parser = argparse.ArgumentParser(
        prog="dcat",
        description="dcat — multi-context registry for Python web hosts.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- dcat contexts ----------------------------------------------------
    contexts_parser = subparsers.add_parser("contexts", help="List declared contexts")
    contexts_parser.add_argument(
        "registry",
        help="Import string (e.g. myapp:registry)",
    )

    # -- dcat routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="Boot and list registered routes")
    routes_parser.add_argument(
        "registry",
        help="Import string (e.g. myapp:registry)",
    )
    routes_parser.add_argument(
        "--context",
        default=None,
        help="Only show routes bound to this context",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "contexts":
        from dcat.cli._contexts import run_contexts

        run_contexts(args)
    elif args.command == "routes":
        from dcat.cli._routes import run_routes

        run_routes(args)
