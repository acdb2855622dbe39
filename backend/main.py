"""
SQL Chat — natural language questions over a relational database.
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import health, schema, chat
from config import settings
from core.db_connector import Database
from core.errors import SqlChatError
from core.schema_registry import SchemaRegistry
from integrations.ollama_client import OllamaClient
from models.connection import ConnectionRequest

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("sqlchat")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("SQL Chat starting up…")
    # Schema starts unloaded; the engine connects on first use
    app.state.registry = SchemaRegistry()
    app.state.database = Database(
        ConnectionRequest.from_settings(settings),
        query_timeout=settings.DB_QUERY_TIMEOUT_SECONDS,
    )
    app.state.ollama = OllamaClient()
    yield
    await app.state.ollama.close()
    await app.state.database.dispose()
    logger.info("SQL Chat shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="SQL Chat",
    description="Ask questions in natural language; get validated SQL and its results.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Errors ────────────────────────────────────────────────────────────────────
@app.exception_handler(SqlChatError)
async def sqlchat_error_handler(request: Request, exc: SqlChatError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    msg = "; ".join(f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors())
    return JSONResponse(status_code=422, content={"error": msg})


# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(health.router)
app.include_router(schema.router)
app.include_router(chat.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT)
