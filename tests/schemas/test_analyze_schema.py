import pytest

from esclient.core.errors import MalformedResponseError
from esclient.schemas.analyze import AnalyzeRequest, AnalyzeResult


def _tok(**overrides):
    base = {"token": "fox", "type": "<ALPHANUM>", "position": 2, "start_offset": 12, "end_offset": 15}
    base.update(overrides)
    return base


def test_request_omits_unset_analyzer():
    assert AnalyzeRequest(body="hello").to_json() == {"body": "hello"}
    assert AnalyzeRequest(body="hello", analyzer="simple").to_json() == {"body": "hello", "analyzer": "simple"}


def test_result_keeps_response_order():
    payload = {"tokens": [_tok(token="b", position=1), _tok(token="a", position=0)]}

    result = AnalyzeResult.from_json(payload)

    assert [t.token for t in result] == ["b", "a"]
    assert result[0].position == 1


def test_type_maps_to_token_type_and_extra_fields_are_ignored():
    result = AnalyzeResult.from_json({"tokens": [_tok(positionLength=1)]})

    assert result[0].token_type == "<ALPHANUM>"


def test_token_missing_position_fails_whole_result():
    bad = _tok()
    del bad["position"]

    with pytest.raises(MalformedResponseError) as exc:
        AnalyzeResult.from_json({"tokens": [_tok(), bad]})
    assert any("position" in e for e in exc.value.errors)


@pytest.mark.parametrize(
    "field,value",
    [
        ("position", "2"),
        ("position", -1),
        ("start_offset", 1.5),
        ("end_offset", True),
        ("token", 7),
        ("type", None),
    ],
)
def test_mistyped_fields_are_rejected(field, value):
    with pytest.raises(MalformedResponseError):
        AnalyzeResult.from_json({"tokens": [_tok(**{field: value})]})


@pytest.mark.parametrize("payload", [{}, {"tokens": "fox"}, {"tokens": None}, [], "tokens"])
def test_bad_envelope_is_rejected(payload):
    with pytest.raises(MalformedResponseError):
        AnalyzeResult.from_json(payload)


def test_to_json_uses_wire_names():
    result = AnalyzeResult.from_json({"tokens": [_tok()]})

    assert result.to_json() == {"tokens": [_tok()]}
