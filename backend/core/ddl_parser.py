"""
DDL import — builds a TableSchema from pasted CREATE TABLE statements,
for when the store can't be introspected directly.
Line-oriented and lenient: one column definition per line is expected.
"""
import re

from core.errors import DdlParseError
from models.schema import Column, TableSchema

_CREATE_TABLE = re.compile(r"CREATE\s+TABLE", re.IGNORECASE)
_HEADER = re.compile(r"^\s*([A-Za-z0-9_\[\]]+)\s*\(([\s\S]+?)\);", re.MULTILINE)
_SKIP_PREFIXES = ("PRIMARY KEY", "CONSTRAINT")


def _unbracket(name: str) -> str:
    return name.replace("[", "").replace("]", "")


def parse_ddl(ddl: str) -> TableSchema:
    tables: TableSchema = {}
    # Everything before the first CREATE TABLE is ignored
    for block in _CREATE_TABLE.split(ddl)[1:]:
        match = _HEADER.match(block)
        if not match:
            continue

        table_name = _unbracket(match.group(1))
        cols: list[Column] = []
        for line in (l.strip() for l in match.group(2).splitlines()):
            if not line or line.upper().startswith(_SKIP_PREFIXES):
                continue
            parts = line.strip(",").split()
            if not parts:
                continue
            col_type = parts[1] if len(parts) > 1 else "UNKNOWN"
            cols.append(Column(name=_unbracket(parts[0]), type=col_type))

        tables[table_name] = cols

    if not tables:
        raise DdlParseError("No CREATE TABLE statements could be parsed")
    return tables
