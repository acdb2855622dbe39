"""
Schema registry — the one cached TableSchema the prompt is built from.
Owned by the app (app.state.registry) and injected; never a module global.
"""
import logging
from typing import Optional

from models.schema import TableSchema

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """Holds either nothing (unloaded) or exactly one TableSchema (loaded)."""

    def __init__(self):
        self._schema: Optional[TableSchema] = None

    @property
    def is_loaded(self) -> bool:
        return self._schema is not None

    def get(self) -> Optional[TableSchema]:
        return self._schema

    def set(self, schema: TableSchema) -> None:
        """Replace the cached schema in one assignment; readers see old or new, never a mix."""
        self._schema = schema
        logger.info("Schema registry loaded with %d tables", len(schema))


def summarize_schema(schema: TableSchema) -> str:
    """
    Render one line per table, in the schema's own order:
        orders(id int, total decimal)
    """
    return "\n".join(
        f"{table}({', '.join(f'{c.name} {c.type}' for c in cols)})"
        for table, cols in schema.items()
    )
