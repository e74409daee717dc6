from __future__ import annotations

import json
import time
from collections import deque
from dataclasses import asdict, dataclass
from typing import Any, Deque, List, Optional

from esclient.core.config import get_settings


@dataclass
class AuditRecord:
    ts: float
    kind: str
    method: str
    path: str
    status: Optional[int]
    outcome: str
    detail: Optional[str] = None


class AuditLogger:
    """Keeps recent request records in memory and mirrors them to a JSONL file."""

    def __init__(self, maxlen: int = 200, file_path: Optional[str] = None) -> None:
        self._buf: Deque[AuditRecord] = deque(maxlen=maxlen)
        self._file_path = file_path
        self.write_error: Optional[OSError] = None

    def log(self, record: AuditRecord) -> None:
        self._buf.append(record)
        if not self._file_path:
            return
        # The file mirror never changes the outcome of the request being logged
        try:
            with open(self._file_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(asdict(record), ensure_ascii=False) + "\n")
        except OSError as e:
            self.write_error = e

    def log_request(self, method: str, path: str, status: Optional[int], outcome: str, detail: Any = None) -> None:
        rec = AuditRecord(
            ts=time.time(),
            kind="request",
            method=method,
            path=path,
            status=status,
            outcome=outcome,
            detail=str(detail) if detail is not None else None,
        )
        self.log(rec)

    def recent(self, n: int = 50) -> List[dict]:
        return [asdict(r) for r in list(self._buf)[-n:]]


_LOGGER: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    global _LOGGER
    if _LOGGER is None:
        _LOGGER = AuditLogger(file_path=get_settings().audit_log_path)
    return _LOGGER
