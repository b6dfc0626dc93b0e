"""Inbound adapters for the record store.

Inbound adapters handle incoming requests and convert them to
record store operations.

Exports:
    REST API:
        - create_app: Create a FastAPI application
        - run_server: Run the REST API server
"""

from record_store.adapters.inbound.rest_api import create_app, run_server

__all__ = [
    "create_app",
    "run_server",
]
