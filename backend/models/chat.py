"""Pydantic schemas for the chat API and the model conversation."""
from decimal import Decimal
from typing import Any, Literal
from pydantic import BaseModel, Field, field_serializer


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)


class ModelSqlResponse(BaseModel):
    """The JSON object the model is instructed to answer with."""
    sql: str
    analysis: str


# rows as returned by the driver: column name -> scalar
QueryResult = list[dict[str, Any]]


class ChatResponse(BaseModel):
    sql: str
    analysis: str
    result: QueryResult = []

    @field_serializer("result", when_used="json")
    def _decimals_as_numbers(self, rows: QueryResult) -> QueryResult:
        # NUMERIC/DECIMAL columns come back as Decimal; pydantic would emit strings
        return [
            {k: float(v) if isinstance(v, Decimal) else v for k, v in row.items()}
            for row in rows
        ]


class ErrorResponse(BaseModel):
    error: str
