"""GET / and GET /health — service status and dependency check."""
import logging
from fastapi import APIRouter, Depends

from api.deps import get_database, get_ollama
from core.db_connector import Database
from integrations.ollama_client import OllamaClient

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)

SERVICE_NAME = "sqlchat-backend"


@router.get("/")
def root():
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health")
async def health_check(
    ollama: OllamaClient = Depends(get_ollama),
    db: Database = Depends(get_database),
):
    ollama_status = await _check_ollama(ollama)
    db_status     = await _check_database(db)
    overall = "ok" if ollama_status["status"] == "up" and db_status["status"] == "up" else "degraded"
    return {
        "status": overall,
        "services": {
            "ollama":   ollama_status,
            "database": db_status,
        },
    }


async def _check_ollama(ollama: OllamaClient) -> dict:
    ok, detail = await ollama.is_healthy()
    if ok:
        return {"status": "up", "model": detail, "url": ollama.host}
    logger.warning("Ollama health check failed: %s", detail)
    return {"status": "down", "error": detail}


async def _check_database(db: Database) -> dict:
    ok, error = await db.ping()
    if ok:
        return {"status": "up", "db_type": db.req.db_type}
    logger.warning("Database health check failed: %s", error)
    return {"status": "down", "error": error}
