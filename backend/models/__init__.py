from models.connection import ConnectionRequest  # noqa: F401
from models.schema import Column, TableSchema, DdlImportRequest  # noqa: F401
from models.chat import ChatMessage, ChatRequest, ChatResponse, ModelSqlResponse, QueryResult, ErrorResponse  # noqa: F401
