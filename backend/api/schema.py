"""/schema — refresh, read and import the cached database schema."""
import logging
from fastapi import APIRouter, Depends

from api.deps import get_database, get_registry
from core.db_connector import Database
from core.ddl_parser import parse_ddl
from core.errors import SchemaNotLoaded
from core.schema_loader import load_schema
from core.schema_registry import SchemaRegistry
from models.schema import DdlImportRequest

router = APIRouter(prefix="/schema", tags=["schema"])
logger = logging.getLogger(__name__)


@router.post("/refresh")
async def refresh_schema(
    registry: SchemaRegistry = Depends(get_registry),
    db: Database = Depends(get_database),
):
    # load_schema raises before set() on any failure, so the previous schema stays
    schema = await load_schema(db)
    registry.set(schema)
    return {"success": True, "schema": schema}


@router.get("")
def get_schema(registry: SchemaRegistry = Depends(get_registry)):
    schema = registry.get()
    if schema is None:
        raise SchemaNotLoaded()
    return {"schema": schema}


@router.post("/ddl")
def import_ddl(req: DdlImportRequest, registry: SchemaRegistry = Depends(get_registry)):
    """Load the registry from pasted CREATE TABLE statements instead of the live store."""
    schema = parse_ddl(req.ddl)
    registry.set(schema)
    logger.info("Schema imported from DDL: %s", ", ".join(schema))
    return {"success": True, "schema": schema}
