"""POST /chat — natural language question in, SQL + rows out."""
import logging
from fastapi import APIRouter, Depends

from api.deps import get_database, get_ollama, get_registry
from core.chat_agent import handle_chat
from core.db_connector import Database
from core.errors import SqlChatError
from core.schema_registry import SchemaRegistry
from integrations.ollama_client import OllamaClient
from models.chat import ChatRequest, ChatResponse, ErrorResponse

router = APIRouter(tags=["chat"])
logger = logging.getLogger(__name__)


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def chat(
    req: ChatRequest,
    registry: SchemaRegistry = Depends(get_registry),
    ollama: OllamaClient = Depends(get_ollama),
    db: Database = Depends(get_database),
):
    try:
        return await handle_chat(req.message, registry=registry, ollama=ollama, db=db)
    except SqlChatError:
        raise
    except Exception as e:
        logger.exception("Chat failed")
        raise SqlChatError(f"Chat error: {e}") from e
