"""
Error taxonomy for the question → SQL → rows pipeline.
Each kind carries the HTTP status it is surfaced with; the wire shape is
always {"error": message}.
"""
from typing import Optional


class SqlChatError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SchemaNotLoaded(SqlChatError):
    status_code = 404

    def __init__(self, message: str = "Schema not loaded"):
        super().__init__(message)


class SchemaLoadError(SqlChatError):
    status_code = 502


class DdlParseError(SqlChatError):
    status_code = 400


class UpstreamServiceError(SqlChatError):
    status_code = 502


class ModelResponseParseError(SqlChatError):
    status_code = 502

    def __init__(self, message: str = "Model response was not a JSON object with 'sql' and 'analysis'"):
        super().__init__(message)


class UnsafeSqlDetected(SqlChatError):
    status_code = 400

    def __init__(self, keyword: str, message: Optional[str] = None):
        super().__init__(
            message or f"Dangerous SQL detected ({keyword}): DDL/DML not allowed by default."
        )
        self.keyword = keyword


class QueryExecutionError(SqlChatError):
    status_code = 400
