from __future__ import annotations

import argparse
import logging

from .bootstrap import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Notion calendar proxy command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP proxy.")
    serve_parser.add_argument("--host", default=None, help="Defaults to $HOST or 0.0.0.0.")
    serve_parser.add_argument("--port", type=int, default=None, help="Defaults to $PORT or 3000.")

    subparsers.add_parser("endpoints", help="Print the registered endpoints and their fields.")

    return parser


def print_endpoints() -> None:
    from .api import get_api_functions

    for func in sorted(get_api_functions(), key=lambda item: item.name):
        required = ", ".join(func.required_fields)
        optional = ", ".join(func.optional_fields) or "-"
        print(f"{func.name:<24} required: {required}  optional: {optional}")


def main(argv: list[str] | None = None) -> None:
    configure_logging()
    logging.getLogger(__name__).info("Notion calendar CLI starting")
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        from .services.http import run_local_server

        run_local_server(host=args.host, port=args.port)
    elif args.command == "endpoints":
        print_endpoints()
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()


if __name__ == "__main__":
    main()
