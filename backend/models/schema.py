"""Pydantic schemas for the cached database schema."""
from pydantic import BaseModel


class Column(BaseModel):
    name: str
    type: str   # raw backing-store type name, never normalised


# table name -> columns in ordinal position order
TableSchema = dict[str, list[Column]]


class DdlImportRequest(BaseModel):
    ddl: str
