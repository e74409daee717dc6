from __future__ import annotations

from typing import Any, List, Optional


class EsError(Exception):
    """Base class for every error raised by the search client."""


class TransportError(EsError):
    """HTTP exchange failed: network error, error status or undecodable body."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class MissingPayloadError(EsError):
    def __init__(self, path: str) -> None:
        super().__init__(f"No JSON payload in response to {path}")
        self.path = path


class MalformedResponseError(EsError):
    """Response JSON is present but does not have the expected shape."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ConfigError(EsError):
    """Settings could not be loaded from the YAML overlay or the environment."""
