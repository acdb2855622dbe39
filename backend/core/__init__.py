from core.db_connector import Database  # noqa: F401
from core.schema_registry import SchemaRegistry, summarize_schema  # noqa: F401
from core.schema_loader import load_schema  # noqa: F401
from core.ddl_parser import parse_ddl  # noqa: F401
from core.sql_validator import check_sql, inspect_sql  # noqa: F401
from core.prompt_builder import build_system_prompt  # noqa: F401
from core.response_parser import parse_model_response  # noqa: F401
