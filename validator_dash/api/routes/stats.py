import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from validator_dash import queries
from validator_dash.api.models import HealthStatus, Statistics
from validator_dash.errors import DashboardError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/statistics", response_model=Statistics)
def get_statistics():
    """Most recent proposer statistics row."""
    try:
        stats = queries.get_latest_statistics()
    except DashboardError:
        logger.exception("Error fetching statistics")
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})
    if stats is None:
        return JSONResponse(status_code=404, content={"error": "No statistics available"})
    return stats


@router.get("/health", response_model=HealthStatus)
def get_health():
    try:
        reachable = queries.ping()
    except DashboardError as exc:
        logger.error("Database check failed: %s", exc)
        return JSONResponse(status_code=503, content={"status": "error", "error": "Database unavailable"})
    return {"status": "ok", "database": reachable}
