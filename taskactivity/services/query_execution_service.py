"""
Admin query tool: validate a read-only SQL statement, run it, return CSV
"""
import csv
import io
import logging
import re
from typing import Any, List, Optional, Sequence

from sqlmodel import Session

from taskactivity.core.config import settings
from taskactivity.core.exceptions import QueryExecutionError

logger = logging.getLogger(__name__)

# Literals match first and are kept verbatim
COMMENT_OR_LITERAL = re.compile(r"('(?:[^']|'')*')|--[^\n]*|/\*.*?\*/", re.S)
STRING_LITERAL = re.compile(r"'(?:[^']|'')*'")

DANGEROUS_KEYWORDS = (
    "INSERT", "UPDATE", "DELETE", "DROP", "CREATE", "ALTER",
    "TRUNCATE", "EXEC", "EXECUTE", "GRANT", "REVOKE",
)
DANGEROUS_SQL = re.compile(r"\b(" + "|".join(DANGEROUS_KEYWORDS) + r")\b", re.I)


def remove_comments(sql: str) -> str:
    """Strip -- line comments and /* */ block comments"""
    return COMMENT_OR_LITERAL.sub(lambda m: m.group(1) or "", sql).strip()


def validate_read_only_query(sql: str) -> str:
    """
    Accept a single SELECT statement.

    Returns the statement with comments removed and any trailing semicolon dropped.

    Raises:
        ValueError: empty query, non-SELECT, write/DDL keyword, or several statements
    """
    if sql is None or not sql.strip():
        raise ValueError("Query cannot be empty")

    cleaned = remove_comments(sql)
    if not cleaned.upper().startswith("SELECT"):
        raise ValueError("Only SELECT queries are allowed")

    match = DANGEROUS_SQL.search(cleaned)
    if match:
        logger.warning(f"Query contains dangerous keyword: {match.group(1).upper()}")
        raise ValueError("Query contains disallowed keywords")

    statement = cleaned.rstrip().rstrip(";").rstrip()
    if ";" in STRING_LITERAL.sub("''", statement):
        raise ValueError("Multiple statements are not allowed")

    return statement


def executable_statement(sql: str) -> str:
    """The submitted SQL with trailing whitespace and one trailing semicolon removed"""
    statement = sql.rstrip()
    if statement.endswith(";"):
        statement = statement[:-1].rstrip()
    return statement


def _csv_cell(value: Any) -> str:
    return "" if value is None else str(value)


def to_csv(columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """
    Header row plus one line per row, "\\n" line endings.
    Values containing a comma, quote, CR or LF are quoted; quotes are doubled.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow([_csv_cell(c) for c in columns])
    for row in rows:
        writer.writerow([_csv_cell(v) for v in row])
    return buf.getvalue()


class QueryExecutionService:
    """Runs admin SELECT queries on the query session"""

    def __init__(self, session: Session, max_rows: Optional[int] = None):
        self.session = session
        self.max_rows = max_rows or settings.QUERY_MAX_ROWS

    def execute_query_as_csv(self, sql: str, username: str) -> str:
        """
        Execute a SQL query and return results as CSV.

        The statement runs as submitted, minus trailing whitespace and one
        trailing semicolon; comment stripping only feeds validation.

        Raises:
            ValueError: the query is not a single read-only SELECT
            QueryExecutionError: the database failed the query
        """
        validate_read_only_query(sql)
        statement = executable_statement(sql)

        logger.info(f"[AUDIT] Admin query executed by user: {username} | Query: {sql[:200]}")
        logger.debug(f"Executing query: {statement[:100]}")

        try:
            conn = self.session.connection()
            # literal % must reach the driver untouched
            rs = conn.exec_driver_sql(statement, execution_options={"no_parameters": True})
            columns: List[str] = list(rs.keys())
            rows = rs.fetchmany(self.max_rows + 1)
        except Exception as e:
            self.session.rollback()
            logger.error("Error executing query", exc_info=True)
            raise QueryExecutionError(f"Failed to execute query: {e}") from e
        finally:
            if self.session.in_transaction():
                self.session.rollback()

        if not rows:
            logger.info("Query returned no results")
            return ""

        if len(rows) > self.max_rows:
            logger.warning(f"Query returned more than {self.max_rows} rows, truncating to {self.max_rows}")
            rows = rows[:self.max_rows]

        return to_csv(columns, rows)
