"""
Lexical safety net for generated SQL.

A denylist, not an authorizer: any standalone DROP / TRUNCATE / ALTER /
DELETE / UPDATE / INSERT anywhere in the text (subquery, string literal,
comment) rejects the statement. Mutating syntax not on the list, e.g.
MERGE, EXEC or GRANT, is NOT caught.
"""
import re
from dataclasses import dataclass
from typing import Optional

from core.errors import UnsafeSqlDetected

FORBIDDEN_KEYWORDS = ("DROP", "TRUNCATE", "ALTER", "DELETE", "UPDATE", "INSERT")

# trailing boundary only: "1DELETE" and "backdrop " still match
_FORBIDDEN_RE = re.compile(r"(" + "|".join(FORBIDDEN_KEYWORDS) + r")\b", re.IGNORECASE)


@dataclass(frozen=True)
class SafetyVerdict:
    safe: bool
    keyword: Optional[str] = None   # matched keyword, upper-cased, when unsafe


def inspect_sql(sql: str) -> SafetyVerdict:
    match = _FORBIDDEN_RE.search(sql)
    if match:
        return SafetyVerdict(safe=False, keyword=match.group(1).upper())
    return SafetyVerdict(safe=True)


def check_sql(sql: str) -> None:
    """Raise UnsafeSqlDetected on the first forbidden keyword; return None otherwise."""
    verdict = inspect_sql(sql)
    if not verdict.safe:
        raise UnsafeSqlDetected(verdict.keyword)
