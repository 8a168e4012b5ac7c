from __future__ import annotations


class ProxyError(RuntimeError):
    """Base error carrying the HTTP status a request failure maps to."""

    status_code = 500


class InvalidRequestError(ProxyError):
    """Raised when a request is rejected locally without touching Notion."""

    status_code = 400


class EndpointNotFoundError(ProxyError):
    """Raised when no endpoint is registered under the requested name."""

    status_code = 404


class NotionTokenMissingError(InvalidRequestError):
    """Raised when a request reaches the gateway without an integration token."""
