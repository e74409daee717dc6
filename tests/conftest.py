from __future__ import annotations

import pytest

from esclient.core import audit
from esclient.core.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for name in ("ES_URL", "ES_TIMEOUT", "ES_AUDIT_LOG_PATH", "ES_SERVICE_NAME", "ES_CONFIG_PATH"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    monkeypatch.setattr(audit, "_LOGGER", None)
    yield
    get_settings.cache_clear()


class FakeClient:
    """Records post_body_op calls and replies with a canned payload."""

    def __init__(self, payload=None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def post_body_op(self, path, body):
        self.calls.append((path, body))
        if self.error is not None:
            raise self.error
        return 200, self.payload


@pytest.fixture
def fake_client_factory():
    return FakeClient
