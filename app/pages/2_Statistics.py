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
from validator_dash.time_utils import format_timestamp
from validator_dash.ui import error_panel, stat_card
from validator_dash.value_utils import format_count, format_latency

settings = get_settings()
configure_logging(settings.log_level)


@st.cache_data(ttl=60)
def get_statistics() -> dict:
    return DashboardClient(settings).statistics()


st.title("Proposer Statistics")

try:
    stats = get_statistics()
except DashboardError as exc:
    error_panel("Statistics unavailable", str(exc), retry_key="statistics_retry")
    st.stop()

st.caption(f"Last Updated: {format_timestamp(stats.get('last_updated')) or 'Fetching...'}")

c1, c2, c3 = st.columns(3)
stat_card(c1, "Average Response Latency", format_latency(stats.get("average_response_latency")))
stat_card(c2, "Total Proposers", format_count(stats.get("total_proposers")))
stat_card(c3, "Proposers in Next 32 Slots", format_count(stats.get("upcoming_slots")))
