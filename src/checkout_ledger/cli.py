"""
Command-line interface for the checkout ledger.

Provides CLI commands for running and inspecting the server:
- run: Start the HTTP API server
- book-id: Print the identifier a book would be registered under
- config: Print the resolved configuration

Usage:
    checkout-ledger run [--host HOST] [--port PORT]
    checkout-ledger book-id ISBN PUBLISHED_DATE
    checkout-ledger config

Environment Variables:
    LEDGER_HOST: Host to bind the API server (default: 0.0.0.0)
    LEDGER_PORT: Port for the API server (default: 3000)
    LEDGER_LOG_LEVEL: Root log level (default: INFO)
"""

import argparse
import sys


def cmd_run(args: argparse.Namespace) -> int:
    """
    Run the API server in the foreground.

    Configuration Priority:
        1. CLI arguments (--host, --port)
        2. Environment variables (LEDGER_HOST, LEDGER_PORT)
        3. config/server.ini, then built-in defaults

    Returns:
        0 on clean shutdown (Ctrl+C), 1 on error during startup
    """
    from checkout_ledger.api.server import start_server

    host = getattr(args, "host", None)
    port = getattr(args, "port", None)

    try:
        start_server(host=host, port=port)
        return 0
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0
    except Exception as e:
        print(f"Error starting server: {e}", file=sys.stderr)
        return 1


def cmd_book_id(args: argparse.Namespace) -> int:
    """Print the content-derived identifier for an ISBN and published date."""
    from checkout_ledger.books import book_identifier

    print(book_identifier(args.isbn, args.published_date))
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Print the resolved configuration."""
    from checkout_ledger.config import print_config_summary

    print_config_summary()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="checkout-ledger",
        description="Checkout Ledger - a hash-linked record of book checkouts",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run the API server",
        description="Start the HTTP API with a fresh in-memory chain.",
    )
    run_parser.add_argument(
        "--port",
        "-p",
        type=int,
        help="API server port (default: 3000, or LEDGER_PORT env var)",
    )
    run_parser.add_argument(
        "--host",
        type=str,
        help="Host to bind to (default: 0.0.0.0, or LEDGER_HOST env var)",
    )
    run_parser.set_defaults(func=cmd_run)

    # book-id command
    book_parser = subparsers.add_parser(
        "book-id",
        help="Print the identifier for a book",
        description="Compute the identifier POST /new would assign to a book.",
    )
    book_parser.add_argument("isbn", help="Book ISBN")
    book_parser.add_argument("published_date", help="Published date, as sent to the API")
    book_parser.set_defaults(func=cmd_book_id)

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Show the resolved configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
