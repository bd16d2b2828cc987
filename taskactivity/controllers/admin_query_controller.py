"""
Admin SQL query tool - runs a read-only SELECT and streams the result as CSV
"""
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from taskactivity.dependencies import require_admin, get_query_execution_service
from taskactivity.schemas import AuthedUser, QueryExecutionRequest
from taskactivity.services import QueryExecutionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/query", tags=["Admin Query"])

CSV_FILENAME = "query-results.csv"


@router.post("/execute")
def execute_query(
    p: QueryExecutionRequest,
    u: AuthedUser = Depends(require_admin),
    service: QueryExecutionService = Depends(get_query_execution_service)
):
    """
    Execute a SELECT statement and return the rows as a CSV attachment.

    400 text/plain for rejected statements, 500 text/plain for anything else.
    """
    try:
        csv_text = service.execute_query_as_csv(p.query, u.username)
    except ValueError as e:
        logger.warning(f"Invalid query from user {u.username}: {e}")
        return PlainTextResponse(f"Error: {e}", status_code=400)
    except Exception as e:
        logger.error(f"Error executing query for user {u.username}", exc_info=e)
        return PlainTextResponse(f"Error executing query: {e}", status_code=500)

    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )
