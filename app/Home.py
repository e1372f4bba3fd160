"""Main Streamlit entrypoint for the validator dashboard.

All data on this UI comes from the dashboard HTTP API, tried against the
configured API bases in order.
"""

import logging
import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from validator_dash.aggregates import average_commission, network_validator_count, preconf_percentage
from validator_dash.client import DashboardClient
from validator_dash.config import get_settings
from validator_dash.errors import DashboardError
from validator_dash.logging_config import configure_logging
from validator_dash.normalize import split_validators
from validator_dash.table import Column, TableConfig
from validator_dash.time_utils import iso_now
from validator_dash.ui import error_panel, load_snapshot, sortable_table, stat_card
from validator_dash.value_utils import format_latency, format_validator_row

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("dashboard.home")

VALIDATOR_TABLE = TableConfig(
    columns=(
        Column("Validator Name", "validator_name"),
        Column("Operator", "name"),
        Column("Commission", "commission"),
        Column("Delegated", "delegated_shares"),
        Column("APR", "apr"),
    ),
    searchable=("validator_name", "name", "commission"),
    partitions=("active", "inactive"),
    default_partition="active",
    page_size=settings.table_page_size,
    empty_message="No validators found",
)


@st.cache_data(ttl=60)
def get_validator_partitions() -> dict:
    client = DashboardClient(settings)
    addresses = client.validators()
    try:
        staking_rows = client.staking_data()
    except DashboardError as exc:
        logger.warning("Staking data unavailable: %s", exc)
        staking_rows = []
    try:
        names = client.operator_names(addresses) if addresses else {}
    except DashboardError as exc:
        logger.warning("Operator names unavailable: %s", exc)
        names = {}
    return {"partitions": split_validators(addresses, staking_rows, names), "fetched_at": iso_now()}


@st.cache_data(ttl=settings.stats_refresh_seconds)
def get_summary_stats() -> dict:
    client = DashboardClient(settings)
    summary = {"preconf": None, "statistics": None}
    try:
        summary["preconf"] = client.preconf_stats()
    except DashboardError as exc:
        logger.error("Failed to fetch preconf stats: %s", exc)
    try:
        summary["statistics"] = client.statistics()
    except DashboardError as exc:
        logger.error("Failed to fetch statistics: %s", exc)
    return summary


st.set_page_config(page_title="Validator Dashboard", layout="wide")
st.title("Validator Dashboard")
st.caption("Interstate preconfirmation validators. Use the sidebar to navigate pages.")

st.subheader("All Validators")
try:
    with st.spinner("Loading validators..."):
        snapshot = load_snapshot("validators", get_validator_partitions)
except DashboardError as exc:
    error_panel("Error loading validators", str(exc), retry_key="validators_retry", snapshot_key="validators")
    st.stop()

partitions = snapshot["partitions"]
active = partitions["active"]
summary = get_summary_stats()
statistics = summary["statistics"] or {}

c1, c2 = st.columns(2)
stat_card(c1, "Average Latency", format_latency(statistics.get("average_response_latency")))
stat_card(
    c2,
    "Eth blocks supporting interstate preconfs last 24 hrs",
    f"{preconf_percentage(len(active), settings.validator_multiplier, settings.total_network_validators)}%",
)
c3, c4, c5 = st.columns(3)
stat_card(c3, "Active Validators", f"{network_validator_count(len(active), settings.validator_multiplier):,}")
stat_card(c4, "Average Commission", average_commission(active))
preconf = summary["preconf"] or {}
stat_card(c5, "Preconf txs per block, last 24 hrs", f"{preconf.get('totalPreconfTxsIn24Hours', 0):.2f}")

sortable_table(
    "validators",
    VALIDATOR_TABLE,
    partitions,
    version=snapshot["fetched_at"],
    format_row=format_validator_row,
    search_placeholder="Search by address, operator or commission...",
)
