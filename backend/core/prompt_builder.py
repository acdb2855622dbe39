"""Builds the system prompt from whatever schema the registry currently holds."""
from core.errors import SchemaNotLoaded
from core.schema_registry import SchemaRegistry, summarize_schema
from prompts.sql_generation import sql_system_prompt


def build_system_prompt(registry: SchemaRegistry) -> str:
    """Never produce a prompt without a schema: raises SchemaNotLoaded while unloaded."""
    schema = registry.get()
    if schema is None:
        raise SchemaNotLoaded()
    return sql_system_prompt.format(schema_summary=summarize_schema(schema)).strip()
