import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from validator_dash.client import DashboardClient
from validator_dash.config import get_settings
from validator_dash.errors import DashboardError
from validator_dash.logging_config import configure_logging
from validator_dash.table import Column, TableConfig
from validator_dash.time_utils import format_row_timestamps, iso_now
from validator_dash.ui import error_panel, load_snapshot, sortable_table

settings = get_settings()
configure_logging(settings.log_level)

MAINNET_TABLE = TableConfig(
    columns=(
        Column("Transaction Hash", "tx_hash"),
        Column("Timestamp", "timestamp"),
        Column("Slot", "slot"),
    ),
    searchable=("tx_hash", "timestamp", "slot"),
    page_size=settings.table_page_size,
    empty_message="No transactions found",
)


@st.cache_data(ttl=20)
def get_mainnet_transactions() -> dict:
    return {"transactions": DashboardClient(settings).mainnet_transactions(), "fetched_at": iso_now()}


st.title("Mainnet Transactions")

try:
    with st.spinner("Loading transactions..."):
        snapshot = load_snapshot("mainnet_transactions", get_mainnet_transactions)
except DashboardError as exc:
    error_panel("Error Loading Transactions", str(exc), retry_key="mainnet_retry", snapshot_key="mainnet_transactions")
    st.stop()

sortable_table(
    "mainnet_transactions",
    MAINNET_TABLE,
    snapshot["transactions"],
    version=snapshot["fetched_at"],
    format_row=format_row_timestamps,
    search_placeholder="Search by hash, timestamp or slot...",
)
