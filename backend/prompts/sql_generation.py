"""
LangChain prompt templates for SQL generation.
"""
from langchain_core.prompts import PromptTemplate

# ── System prompt ─────────────────────────────────────────────────────────────
# The schema summary is the only variable part; every request is prompted
# on its own with no conversation history.

SQL_SYSTEM_TEMPLATE = """\
You are an expert SQL assistant.
Use the following schema ONLY:

{schema_summary}

Rules:
- Use only tables/columns from the schema.
- Never hallucinate columns.
- Default SQL = read-only SELECT.
- Limit large or unbounded result sets to 100 rows (TOP 100 on SQL Server, LIMIT 100 elsewhere).
- Output JSON only, with no markdown and no text around it:
{{
  "sql": "...",
  "analysis": "..."
}}
"""

sql_system_prompt = PromptTemplate(
    input_variables=["schema_summary"],
    template=SQL_SYSTEM_TEMPLATE,
)
