import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from validator_dash import queries
from validator_dash.aggregates import preconf_ratio_24h
from validator_dash.api.dependencies import (
    NOT_ALLOWED_METHODS,
    method_not_allowed,
    settings_dependency,
    upstream_dependency,
)
from validator_dash.api.models import PreconfStats, PreconfTransactions, Transaction
from validator_dash.config import Settings
from validator_dash.errors import DashboardError
from validator_dash.normalize import transaction_row
from validator_dash.upstream import UpstreamClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transactions"])

PRECONF_LABEL = "Eth blocks supporting interstate preconfs last 24 hrs"
RECENT_PRECONF_LIMIT = 1000


@router.get("/preconf-transactions", response_model=PreconfTransactions)
def get_preconf_transactions(settings: Settings = Depends(settings_dependency)):
    try:
        rows = queries.get_recent_preconf_transactions(RECENT_PRECONF_LIMIT)
        total_preconfs = queries.count_preconfs_last_24h()
    except DashboardError as exc:
        logger.exception("Error fetching transactions")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch transactions", "details": str(exc)},
        )
    logger.debug("Preconfs in last 24h: %d", total_preconfs)
    return {
        "transactions": [transaction_row(row) for row in rows],
        "totalPreconfTxsIn24Hours": preconf_ratio_24h(total_preconfs, settings.blocks_per_day),
        "label": PRECONF_LABEL,
        "debug": {"totalPreconfs": total_preconfs, "blocksPerDay": settings.blocks_per_day},
    }


@router.api_route("/preconf-transactions", methods=NOT_ALLOWED_METHODS, include_in_schema=False)
def preconf_transactions_wrong_method():
    return method_not_allowed()


@router.get("/preconf-stats", response_model=PreconfStats)
def get_preconf_stats(settings: Settings = Depends(settings_dependency)):
    try:
        total_preconfs = queries.count_preconfs_last_24h()
    except DashboardError as exc:
        logger.exception("Error fetching preconf stats")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch preconf stats", "details": str(exc)},
        )
    return {
        "totalPreconfs": total_preconfs,
        "totalPreconfTxsIn24Hours": preconf_ratio_24h(total_preconfs, settings.blocks_per_day),
    }


@router.api_route("/preconf-stats", methods=NOT_ALLOWED_METHODS, include_in_schema=False)
def preconf_stats_wrong_method():
    return method_not_allowed()


@router.get("/mainnet-transactions", response_model=List[Transaction])
def get_mainnet_transactions(
    settings: Settings = Depends(settings_dependency),
    upstream: UpstreamClient = Depends(upstream_dependency),
):
    try:
        return upstream.transactions(limit=settings.mainnet_tx_limit)
    except DashboardError as exc:
        logger.exception("Error fetching mainnet transactions")
        return JSONResponse(status_code=500, content={"error": str(exc) or "Server error"})
