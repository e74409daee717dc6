"""
Analyze operation: run text through one of the search engine's analyzers.

    op = AnalyzeOperation("quick brown fox").with_index("docs").with_analyzer("standard")
    result = op.send(client)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Protocol, Tuple

from esclient.core.errors import MissingPayloadError
from esclient.core.metrics import record_tokens
from esclient.core.otel import get_tracer
from esclient.schemas.analyze import AnalyzeRequest, AnalyzeResult


class BodyOpClient(Protocol):
    def post_body_op(self, path: str, body: Dict[str, Any]) -> Tuple[int, Optional[Dict[str, Any]]]: ...


@dataclass(frozen=True)
class AnalyzeOperation:
    """Immutable builder; each ``with_*`` call returns a new operation.

    The client is not stored on the operation, it is handed to ``send``.
    """

    body: str
    index: Optional[str] = None
    analyzer: Optional[str] = None

    @classmethod
    def new(cls, body: str) -> "AnalyzeOperation":
        return cls(body=body)

    def with_index(self, index: str) -> "AnalyzeOperation":
        return replace(self, index=index)

    def with_analyzer(self, analyzer: str) -> "AnalyzeOperation":
        return replace(self, analyzer=analyzer)

    @property
    def path(self) -> str:
        if self.index is None:
            return "/_analyze"
        return f"/{self.index}/_analyze"

    @property
    def request(self) -> AnalyzeRequest:
        return AnalyzeRequest(body=self.body, analyzer=self.analyzer)

    def send(self, client: BodyOpClient) -> AnalyzeResult:
        """POST the request through ``client`` and parse the tokens.

        Errors raised by the client propagate unchanged. A response without a
        JSON payload raises MissingPayloadError, a payload of the wrong shape
        raises MalformedResponseError.
        """
        path = self.path
        with get_tracer().start_as_current_span("esclient.analyze") as span:
            span.set_attribute("esclient.path", path)
            if self.analyzer:
                span.set_attribute("esclient.analyzer", self.analyzer)
            _, payload = client.post_body_op(path, self.request.to_json())
            if payload is None:
                raise MissingPayloadError(path)
            result = AnalyzeResult.from_json(payload)
            span.set_attribute("esclient.tokens", len(result))
        record_tokens(self.analyzer, len(result))
        return result
