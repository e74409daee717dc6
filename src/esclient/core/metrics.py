from __future__ import annotations

import time
from contextlib import contextmanager

from prometheus_client import Counter, Histogram

HTTP_LATENCY = Histogram(
    "esclient_http_latency_seconds",
    "Latency of HTTP calls to the search engine",
    labelnames=("method", "path"),
)
HTTP_ERRORS = Counter(
    "esclient_http_errors_total",
    "HTTP errors",
    labelnames=("method", "path", "status"),
)
ANALYZED_TOKENS = Counter(
    "esclient_analyzed_tokens_total",
    "Tokens returned by analyze calls",
    labelnames=("analyzer",),
)


@contextmanager
def record_latency(method: str, path: str):
    start = time.time()
    try:
        yield
    finally:
        HTTP_LATENCY.labels(method=method, path=path).observe(time.time() - start)


def record_error(method: str, path: str, status: str) -> None:
    HTTP_ERRORS.labels(method=method, path=path, status=status).inc()


def record_tokens(analyzer: str | None, count: int) -> None:
    if count:
        ANALYZED_TOKENS.labels(analyzer=analyzer or "default").inc(count)


def path_template(path: str) -> str:
    """Collapse the index segment so metric labels do not grow per index.

    /docs/_analyze -> /{index}/_analyze
    """
    segments = path.split("?", 1)[0].strip("/").split("/")
    if segments and segments[0] and not segments[0].startswith("_"):
        segments[0] = "{index}"
    return "/" + "/".join(segments)
