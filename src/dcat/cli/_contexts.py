"""``dcat contexts`` — list declared contexts."""

import argparse

from dcat.cli._resolve import resolve_or_exit


def run_contexts(args: argparse.Namespace) -> None:
    """Print NAME, ENABLED and PREFIX for the default and every declared context."""
    registry = resolve_or_exit(args)

    default = registry.options.default_name
    rows: list[tuple[str, str, str]] = [(default, "default", registry.route_prefix(default))]
    for name, enabled in registry.declared_contexts().items():
        if name == default:
            continue
        rows.append((name, "yes" if enabled else "no", registry.route_prefix(name)))

    max_name = max(max(len(r[0]) for r in rows), 4)  # "NAME" header
    fmt = f"{{:<{max_name}}}  {{:<7}}  {{}}"
    print(fmt.format("NAME", "ENABLED", "PREFIX"))
    for row in rows:
        print(fmt.format(*row))
