"""In-memory users and sales with a Flask HTTP API, demo seed data and a console client."""

__version__ = "0.1.0"
__all__ = ["api", "client", "sales", "seed", "server", "users"]