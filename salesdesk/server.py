"""Command that seeds the sample data and serves the HTTP API."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from flask import Flask

from salesdesk.api import create_app
from salesdesk.sales import SaleService, SaleStorage
from salesdesk.seed import init_system
from salesdesk.users import LocalUserStorage, UserService

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 1234


def build_app() -> Flask:
    """Create the services, load the sample data and return the application."""
    sale_service = SaleService(SaleStorage())
    user_service = UserService(LocalUserStorage())
    init_system(sale_service, user_service)
    return create_app(user_service, sale_service)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Run the HTTP server."""
    parser = argparse.ArgumentParser(description="Serve the users and sales API.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    app = build_app()
    try:
        app.run(host=args.host, port=args.port)
    except OSError as exc:
        raise SystemExit(f"error trying to start server: {exc}") from exc


if __name__ == "__main__":
    main()