from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from esclient.core.errors import MalformedResponseError


class AnalyzeRequest(BaseModel):
    """Body of a ``_analyze`` call."""

    model_config = ConfigDict(frozen=True)

    body: str
    analyzer: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        # analyzer is only sent when set
        return self.model_dump(exclude_none=True)


class Token(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    token: StrictStr
    token_type: StrictStr = Field(alias="type")
    position: StrictInt = Field(ge=0)
    start_offset: StrictInt = Field(ge=0)
    end_offset: StrictInt = Field(ge=0)


class _AnalyzeResponse(BaseModel):
    tokens: List[Token]


@dataclass(frozen=True)
class AnalyzeResult:
    """Tokens produced by an analyzer, in the order the engine returned them."""

    tokens: Tuple[Token, ...] = ()

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __getitem__(self, idx: int) -> Token:
        return self.tokens[idx]

    @classmethod
    def from_json(cls, payload: Any) -> "AnalyzeResult":
        """Validate a decoded response body.

        Any missing or mistyped field fails the whole result; nothing is defaulted.
        """
        if not isinstance(payload, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(payload).__name__}",
                errors=["response is not an object"],
            )
        try:
            parsed = _AnalyzeResponse.model_validate(payload)
        except ValidationError as e:
            errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            raise MalformedResponseError(f"Malformed analyze response: {'; '.join(errors)}", errors=errors) from e
        return cls(tokens=tuple(parsed.tokens))

    def to_json(self) -> Dict[str, Any]:
        return {"tokens": [t.model_dump(by_alias=True) for t in self.tokens]}
