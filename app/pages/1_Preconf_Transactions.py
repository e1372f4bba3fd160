import logging
import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from validator_dash.aggregates import preconf_activity, preconf_percentage
from validator_dash.client import DashboardClient
from validator_dash.config import get_settings
from validator_dash.errors import DashboardError
from validator_dash.logging_config import configure_logging
from validator_dash.table import Column, TableConfig
from validator_dash.time_utils import format_row_timestamps, iso_now
from validator_dash.ui import error_panel, load_snapshot, sortable_table, stat_card

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("dashboard.preconf")

TRANSACTION_TABLE = TableConfig(
    columns=(
        Column("Transaction Hash", "tx_hash"),
        Column("Timestamp", "timestamp"),
        Column("Slot", "slot"),
    ),
    searchable=("tx_hash", "timestamp", "slot"),
    page_size=settings.table_page_size,
    empty_message="No transactions found",
)


@st.cache_data(ttl=30)
def get_preconf_transactions() -> dict:
    data = DashboardClient(settings).preconf_transactions()
    data["fetched_at"] = iso_now()
    return data


@st.cache_data(ttl=settings.stats_refresh_seconds)
def get_active_validator_count() -> int:
    try:
        return len(DashboardClient(settings).validators())
    except DashboardError as exc:
        logger.error("Error fetching validators: %s", exc)
        return 0


st.title("Preconf Transactions")

active_count = get_active_validator_count()
c1, c2 = st.columns(2)
stat_card(
    c1,
    "Eth blocks supporting interstate preconfs last 24 hrs",
    f"{preconf_percentage(active_count, settings.validator_multiplier, settings.total_network_validators)}%",
)

try:
    with st.spinner("Loading transactions..."):
        snapshot = load_snapshot("preconf_transactions", get_preconf_transactions)
except DashboardError as exc:
    error_panel(
        "Error Loading Transactions",
        str(exc),
        causes=(
            "Network connectivity issues",
            "API endpoints temporarily unavailable",
            "Database connection problems",
        ),
        retry_key="preconf_retry",
        snapshot_key="preconf_transactions",
    )
    st.stop()

stat_card(c2, "Preconf txs per block, last 24 hrs", f"{snapshot['totalPreconfTxsIn24Hours']:.2f}")

transactions = snapshot["transactions"]
activity = preconf_activity(transactions)
if activity.height:
    st.subheader("Activity")
    st.bar_chart(activity, x="block_timestamp", y="tx_count", width="stretch")
    st.caption(f"Buckets: {activity.height} | transactions: {int(activity['tx_count'].sum()):,}")

st.subheader("Transactions")
sortable_table(
    "preconf_transactions",
    TRANSACTION_TABLE,
    transactions,
    version=snapshot["fetched_at"],
    format_row=format_row_timestamps,
    search_placeholder="Search by hash, timestamp or slot...",
)
