import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from validator_dash import queries
from validator_dash.api.dependencies import NOT_ALLOWED_METHODS, method_not_allowed, upstream_dependency
from validator_dash.api.models import StakingRow, ValidatorList
from validator_dash.errors import DashboardError, ValidationError
from validator_dash.upstream import UpstreamClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validators"])


@router.get("/validators", response_model=ValidatorList)
def get_validators(upstream: UpstreamClient = Depends(upstream_dependency)):
    """Active validator addresses, proxied from the upstream service."""
    try:
        return upstream.active_validators()
    except DashboardError:
        logger.exception("Error fetching validators")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch validators"})


@router.api_route("/validators", methods=NOT_ALLOWED_METHODS, include_in_schema=False)
def validators_wrong_method():
    return method_not_allowed()


@router.get("/staking-data", response_model=List[StakingRow])
def get_staking_data():
    try:
        return queries.get_staking_rows()
    except DashboardError:
        logger.exception("Error fetching validator data")
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def parse_addresses(body: object) -> List[str]:
    addresses = body.get("addresses") if isinstance(body, dict) else None
    if not isinstance(addresses, list) or not all(isinstance(a, str) for a in addresses):
        raise ValidationError("Addresses array is required")
    return addresses


@router.post("/operator-names")
async def post_operator_names(request: Request):
    """Operator name for each address; unknown addresses map to ``"N/A"``."""
    try:
        body = await request.json()
    except ValueError:
        body = None
    try:
        addresses = parse_addresses(body)
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"message": str(exc)})

    logger.info("Received addresses count: %d", len(addresses))
    try:
        names = await run_in_threadpool(queries.get_operator_names, addresses)
    except DashboardError:
        logger.exception("Error fetching operator names")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
    logger.info("Resolved operator names: %d", sum(1 for name in names.values() if name != "N/A"))
    return names


@router.api_route("/operator-names", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def operator_names_wrong_method():
    return method_not_allowed("message")
