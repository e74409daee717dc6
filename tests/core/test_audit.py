import json

from esclient.core.audit import AuditLogger


def test_recent_keeps_only_last_records():
    logger = AuditLogger(maxlen=2)
    for i in range(3):
        logger.log_request("POST", f"/i{i}/_analyze", 200, "ok")

    paths = [r["path"] for r in logger.recent()]

    assert paths == ["/i1/_analyze", "/i2/_analyze"]


def test_records_are_appended_as_json_lines(tmp_path):
    path = tmp_path / "audit.jsonl"
    logger = AuditLogger(file_path=str(path))

    logger.log_request("POST", "/_analyze", 500, "http_error", {"error": "boom"})
    logger.log_request("POST", "/_analyze", 200, "ok")

    lines = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [r["outcome"] for r in lines] == ["http_error", "ok"]
    assert lines[0]["detail"] == "{'error': 'boom'}"
    assert lines[1]["detail"] is None


def test_unwritable_file_keeps_in_memory_record(tmp_path):
    logger = AuditLogger(file_path=str(tmp_path / "missing" / "audit.jsonl"))

    logger.log_request("POST", "/_analyze", 200, "ok")

    assert logger.recent()[0]["outcome"] == "ok"
    assert isinstance(logger.write_error, OSError)
