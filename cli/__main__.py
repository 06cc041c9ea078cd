"""Entry point for running the CLI as a module."""

import argparse
import sys

from .resolve_cli import main


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Resolve the client IP of a request from its headers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "example:\n"
            "  python -m cli -H 'X-Forwarded-For: 10.0.0.1, 8.8.8.8'\n"
        ),
    )

    parser.add_argument(
        "-H",
        "--header",
        dest="headers",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Request header (repeatable, repeated names are merged)",
    )
    parser.add_argument(
        "--remote-addr",
        type=str,
        default=None,
        help="Transport peer address (only used with --fallback)",
    )
    parser.add_argument(
        "--override-header",
        type=str,
        default=None,
        help="Consult only this header instead of the priority list",
    )
    parser.add_argument(
        "--header-priority",
        type=str,
        default=None,
        help="Comma-separated header priority list (default: built-in list)",
    )
    parser.add_argument(
        "--fallback",
        action="store_true",
        help="Fall back to --remote-addr when no header resolves",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the outcome and tags as JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (shows skipped candidates)",
    )

    return parser.parse_args(argv)


def cli_entry() -> None:
    """CLI entry point."""
    args = parse_args()
    sys.exit(
        main(
            headers=args.headers,
            remote_addr=args.remote_addr,
            override_header=args.override_header,
            header_priority=args.header_priority,
            fallback=args.fallback,
            as_json=args.json,
            debug=args.debug,
        )
    )


if __name__ == "__main__":
    cli_entry()
