"""Read-only SQL used by the API handlers."""

from __future__ import annotations

from typing import Any, Sequence

from validator_dash.db import fetch_all, fetch_one
from validator_dash.hex import address_key
from validator_dash.time_utils import to_iso


def get_staking_rows() -> list[dict[str, Any]]:
    return fetch_all(
        """
        SELECT id, validator_name, commission, delegated_shares, apr
        FROM public.validators
        ORDER BY id ASC
        """
    )


def get_latest_statistics() -> dict[str, Any] | None:
    row = fetch_one(
        """
        SELECT average_response_latency, total_proposers, upcoming_slots, last_updated
        FROM public.statistics
        ORDER BY last_updated DESC
        LIMIT 1
        """
    )
    if row is None:
        return None
    return {key: to_iso(value) for key, value in row.items()}


def get_recent_preconf_transactions(limit: int = 1000) -> list[dict[str, Any]]:
    return fetch_all(
        """
        SELECT tx_hash, slot, timestamp
        FROM transaction_hashes
        ORDER BY timestamp DESC
        LIMIT %s
        """,
        (limit,),
    )


def count_preconfs_last_24h() -> int:
    row = fetch_one(
        """
        SELECT COUNT(*) AS total_preconfs
        FROM transaction_hashes
        WHERE timestamp >= NOW() - INTERVAL '24 HOURS'
        """
    )
    return int(row["total_preconfs"]) if row else 0


def get_operator_names(addresses: Sequence[str]) -> dict[str, str]:
    """Map each requested address (as given) to its operator name or ``"N/A"``.

    Matching ignores case and surrounding whitespace on both sides.
    """
    if not addresses:
        return {}
    keys = sorted({address_key(address) for address in addresses})
    rows = fetch_all(
        """
        SELECT address, operator_name
        FROM validators
        WHERE LOWER(TRIM(address)) = ANY(%s)
        """,
        (keys,),
    )
    operators: dict[str, str] = {}
    for row in rows:
        if row.get("address"):
            operators[address_key(row["address"])] = row.get("operator_name") or "N/A"
    return {address: operators.get(address_key(address), "N/A") for address in addresses}


def ping() -> bool:
    row = fetch_one("SELECT 1 AS ok")
    return bool(row and row.get("ok") == 1)
