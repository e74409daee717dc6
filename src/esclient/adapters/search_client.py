"""
HTTP client for an Elasticsearch-compatible search engine.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import requests

from esclient.core.audit import get_audit_logger
from esclient.core.config import Settings, get_settings
from esclient.core.errors import TransportError
from esclient.core.metrics import path_template, record_error, record_latency
from esclient.operations.analyze import AnalyzeOperation
from esclient.schemas.analyze import AnalyzeResult


class SearchClient:
    """
    Thin wrapper around a requests.Session pointed at one search node.

    The caller owns the client; operations borrow it for the duration of a call.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """
        Args:
            base_url: Node URL, e.g. http://localhost:9200 (default from ES_URL)
            timeout: Per-request timeout in seconds (default from ES_TIMEOUT)
            settings: Explicit settings instead of the process-wide ones
        """
        s = settings or get_settings()
        self.base_url = (base_url or s.url).rstrip("/")
        self.timeout = timeout if timeout is not None else s.timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def __enter__(self) -> "SearchClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def execute_request(self, method: str, path: str, **kwargs: Any) -> Tuple[int, Optional[Dict[str, Any]]]:  # noqa: ANN401
        """
        Perform an HTTP request against the search engine.

        Args:
            method: HTTP method (GET, POST, ...)
            path: Path relative to the node, e.g. /docs/_analyze
            **kwargs: Extra arguments for requests (json=, params=, ...)

        Returns:
            (status_code, decoded JSON body or None when the body is empty)

        Raises:
            TransportError: network failure, HTTP status >= 400 or a body that is not JSON
        """
        url = f"{self.base_url}{path}"
        audit = get_audit_logger()
        label = path_template(path)

        try:
            with record_latency(method, label):
                response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            record_error(method, label, "network")
            audit.log_request(method, path, None, "network_error", e)
            raise TransportError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            details = _error_details(response)
            record_error(method, label, str(response.status_code))
            audit.log_request(method, path, response.status_code, "http_error", details)
            raise TransportError(
                f"{method} {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
                details=details,
            )

        if not response.content:
            audit.log_request(method, path, response.status_code, "ok", "empty body")
            return response.status_code, None

        try:
            payload = response.json()
        except ValueError as e:
            audit.log_request(method, path, response.status_code, "bad_json", e)
            raise TransportError(
                f"{method} {path} returned a body that is not JSON",
                status_code=response.status_code,
                details=response.text,
            ) from e

        audit.log_request(method, path, response.status_code, "ok")
        return response.status_code, payload

    def post_body_op(self, path: str, body: Dict[str, Any]) -> Tuple[int, Optional[Dict[str, Any]]]:
        """POST a JSON body; returns (status_code, optional JSON payload)."""
        return self.execute_request("POST", path, json=body)

    def analyze(self, body: str, index: Optional[str] = None, analyzer: Optional[str] = None) -> AnalyzeResult:
        """Analyze text, optionally scoped to an index and with a named analyzer."""
        op = AnalyzeOperation(body)
        if index is not None:
            op = op.with_index(index)
        if analyzer is not None:
            op = op.with_analyzer(analyzer)
        return op.send(self)


def _error_details(response: requests.Response) -> Any:
    # Search engines report errors as JSON; fall back to text otherwise
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
