"""
Schema loader — reflects base tables and their columns from the backing store.
The whole snapshot is built before anything is handed to the registry.
"""
import logging
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from core.db_connector import Database
from core.errors import SchemaLoadError
from models.schema import Column, TableSchema

logger = logging.getLogger(__name__)


async def load_schema(db: Database) -> TableSchema:
    """
    Read every base table (views excluded) and its columns in ordinal order.
    Any failure, including one table's column lookup, aborts the whole load.
    """
    try:
        schema = await db.run_sync(lambda conn: _reflect(conn, _get_default_schema(db.req.db_type)))
    except ValueError as e:
        raise SchemaLoadError(str(e)) from e
    except SQLAlchemyError as e:
        logger.exception("Schema introspection failed")
        raise SchemaLoadError(f"Schema introspection failed: {e}") from e

    logger.info("Discovered %d tables", len(schema))
    return schema


def _reflect(conn, schema_name: Optional[str]) -> TableSchema:
    insp = inspect(conn)
    schema: TableSchema = {}
    for table_name in insp.get_table_names(schema=schema_name):
        # Inspector binds the table name as a parameter in its catalog queries
        schema[table_name] = _reflect_columns(insp, table_name, schema_name)
    return schema


def _reflect_columns(insp, table_name: str, schema: Optional[str]) -> list[Column]:
    return [
        Column(name=col["name"], type=str(col["type"]))
        for col in insp.get_columns(table_name, schema=schema)
    ]


def _get_default_schema(db_type: str) -> Optional[str]:
    if db_type == "postgresql":
        return "public"
    if db_type == "mssql":
        return "dbo"
    return None   # SQLite has no schema concept
