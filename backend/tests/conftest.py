import os
import sys

# Add the parent directory (backend) to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
import sqlite3
import tempfile
from fastapi.testclient import TestClient

from main import app
from api.deps import get_database, get_ollama, get_registry
from core.errors import UpstreamServiceError
from core.schema_registry import SchemaRegistry
from models.schema import Column


class FakeOllama:
    """Stands in for OllamaClient: returns a canned reply and records every call."""

    host = "http://ollama.test"
    model = "test-model"

    def __init__(self, reply: str = "", error: Exception = None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def chat(self, messages):
        self.calls.append(list(messages))
        if self.error:
            raise self.error
        return self.reply

    async def is_healthy(self):
        return True, self.model


class FakeDatabase:
    """Stands in for Database: returns canned rows and records every statement."""

    class _Req:
        db_type = "sqlite"

    req = _Req()

    def __init__(self, rows=None):
        self.rows = rows if rows is not None else []
        self.queries = []

    async def run_query(self, sql):
        self.queries.append(sql)
        return self.rows

    async def ping(self):
        return True, None


@pytest.fixture
def orders_schema():
    return {
        "orders": [Column(name="id", type="int"), Column(name="total", type="decimal")],
    }


@pytest.fixture
def registry():
    return SchemaRegistry()


@pytest.fixture
def loaded_registry(registry, orders_schema):
    registry.set(orders_schema)
    return registry


@pytest.fixture
def fake_ollama():
    return FakeOllama()


@pytest.fixture
def fake_db():
    return FakeDatabase(rows=[{"id": 1, "total": 10.5}, {"id": 2, "total": 99.0}])


@pytest.fixture
def client(registry, fake_ollama, fake_db):
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_ollama] = lambda: fake_ollama
    app.dependency_overrides[get_database] = lambda: fake_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def upstream_down():
    return FakeOllama(error=UpstreamServiceError("Inference service unreachable: connection refused"))


@pytest.fixture
def temp_sqlite_db():
    fd, path = tempfile.mkstemp(suffix=".db")
    try:
        conn = sqlite3.connect(path)
        cur = conn.cursor()
        cur.execute("CREATE TABLE orders (id INTEGER PRIMARY KEY, total DECIMAL(10, 2), status TEXT);")
        cur.execute("CREATE TABLE customers (id INTEGER PRIMARY KEY, name TEXT, email TEXT UNIQUE);")
        cur.execute("CREATE VIEW big_orders AS SELECT * FROM orders WHERE total > 100;")
        cur.execute("INSERT INTO orders (total, status) VALUES (10.5, 'SHIPPED'), (250, 'PENDING');")
        cur.execute("INSERT INTO customers (name, email) VALUES ('Test User', 'test@example.com');")
        conn.commit()
        conn.close()
        yield path
    finally:
        os.close(fd)
        os.remove(path)
