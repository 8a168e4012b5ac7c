"""HTTP services for the Notion calendar proxy."""

from .server import app, invoke_endpoint, list_endpoints, run_local_server

__all__ = [
    "app",
    "invoke_endpoint",
    "list_endpoints",
    "run_local_server",
]
