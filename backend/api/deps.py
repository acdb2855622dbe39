"""Request-scoped access to the collaborators created in the app lifespan."""
from fastapi import Request

from core.db_connector import Database
from core.schema_registry import SchemaRegistry
from integrations.ollama_client import OllamaClient


def get_registry(request: Request) -> SchemaRegistry:
    return request.app.state.registry


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_ollama(request: Request) -> OllamaClient:
    return request.app.state.ollama
