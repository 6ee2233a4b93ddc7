"""``kennel routes`` — list registered routes.

Prints the route table in match order: the order routes were
registered, with the fallback last.
"""

import argparse

from kennel.config import AppConfig
from kennel.service import create_app


def run_routes(args: argparse.Namespace) -> None:  # noqa: ARG001
    """Print a table of METHOD, PATH, and handler name."""
    app = create_app(AppConfig(seed=False))

    # Build rows: (methods_str, path, handler_name)
    rows: list[tuple[str, str, str]] = []
    for route in app.routes:
        methods_str = ", ".join(sorted(route.methods)) or "*"
        handler_name = route.name or getattr(route.handler, "__name__", str(route.handler))
        rows.append((methods_str, route.path, handler_name))

    # Column widths
    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods_str, path, handler_name in rows:
        print(fmt.format(methods_str, path, handler_name))
