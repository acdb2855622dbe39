"""
Parses the model's raw text into the {sql, analysis} contract.
Returns a tagged result instead of raising, so callers branch on it.
"""
import json
import re
from dataclasses import dataclass
from typing import Union

from pydantic import ValidationError

from models.chat import ModelSqlResponse


_FENCE = re.compile(r"^```(?:json|JSON)?\s*([\s\S]*?)\s*```$")


@dataclass(frozen=True)
class ValidResponse:
    response: ModelSqlResponse


@dataclass(frozen=True)
class InvalidResponse:
    raw_text: str
    reason: str


ParsedModelResponse = Union[ValidResponse, InvalidResponse]


def _strip_fence(raw: str) -> str:
    # Models sometimes wrap the JSON in a markdown fence despite instructions
    text = raw.strip()
    match = _FENCE.match(text)
    return match.group(1) if match else text


def parse_model_response(raw: str) -> ParsedModelResponse:
    try:
        payload = json.loads(_strip_fence(raw))
    except json.JSONDecodeError as e:
        return InvalidResponse(raw_text=raw, reason=f"not JSON: {e.msg}")

    if not isinstance(payload, dict):
        return InvalidResponse(raw_text=raw, reason="not a JSON object")

    try:
        # strict: "sql": 1 is rejected rather than coerced
        parsed = ModelSqlResponse.model_validate(payload, strict=True)
    except ValidationError as e:
        return InvalidResponse(raw_text=raw, reason=f"missing or invalid fields: {e.error_count()} error(s)")

    if not parsed.sql.strip():
        return InvalidResponse(raw_text=raw, reason="empty sql")
    return ValidResponse(response=parsed)
