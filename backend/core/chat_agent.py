"""
Chat agent — turns one question into SQL, checks it, runs it.

    prompt → complete → parse → validate → execute

Strictly sequential; the first failing stage raises and nothing after it runs.
On failure the generated SQL is logged, never returned.
"""
import logging

from core.db_connector import Database
from core.errors import ModelResponseParseError, UnsafeSqlDetected
from core.prompt_builder import build_system_prompt
from core.response_parser import InvalidResponse, parse_model_response
from core.schema_registry import SchemaRegistry
from core.sql_validator import inspect_sql
from integrations.ollama_client import OllamaClient
from models.chat import ChatMessage, ChatResponse

logger = logging.getLogger(__name__)


async def handle_chat(
    message: str,
    registry: SchemaRegistry,
    ollama: OllamaClient,
    db: Database,
) -> ChatResponse:
    """Main chat handler. Raises a SqlChatError subclass at the first failing stage."""
    system = build_system_prompt(registry)

    messages = [
        ChatMessage(role="system", content=system),
        ChatMessage(role="user", content=message),
    ]
    logger.info("Chat question: %s", message[:80])
    raw = await ollama.chat(messages)

    parsed = parse_model_response(raw)
    if isinstance(parsed, InvalidResponse):
        logger.warning("Unparseable model response (%s): %.200s", parsed.reason, parsed.raw_text)
        raise ModelResponseParseError()
    answer = parsed.response

    verdict = inspect_sql(answer.sql)
    if not verdict.safe:
        logger.warning("Rejected generated SQL (%s): %s", verdict.keyword, answer.sql)
        raise UnsafeSqlDetected(verdict.keyword)

    logger.debug("Executing generated SQL: %s", answer.sql)
    rows = await db.run_query(answer.sql)
    logger.info("Query returned %d rows", len(rows))

    return ChatResponse(sql=answer.sql, analysis=answer.analysis, result=rows)
