"""Map upstream and API payloads onto the row shapes the tables use."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from validator_dash.errors import InvalidResponseShape
from validator_dash.hex import address_key
from validator_dash.time_utils import iso_now, to_iso


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def normalize_transaction(raw: Mapping[str, Any]) -> dict:
    """Upstream transactions name their fields differently per chain client."""
    slot = _first(raw, "slot", "blockNumber")
    if isinstance(slot, str):
        try:
            slot = int(slot, 16) if slot.startswith("0x") else int(slot)
        except ValueError as exc:
            raise InvalidResponseShape(f"Unparseable slot {slot!r}") from exc
    return {
        "tx_hash": _first(raw, "signature", "hash", "id"),
        "slot": slot or 0,
        "timestamp": to_iso(raw.get("timestamp")) or iso_now(),
    }


def normalize_transactions(raw: Any, limit: int | None = None) -> list[dict]:
    if not isinstance(raw, list):
        raise InvalidResponseShape("Expected a list of transactions")
    rows = [normalize_transaction(tx) for tx in raw if isinstance(tx, Mapping)]
    return rows[:limit] if limit is not None else rows


def transaction_row(row: Mapping[str, Any]) -> dict:
    return {
        "tx_hash": row.get("tx_hash"),
        "slot": row.get("slot"),
        "timestamp": to_iso(row.get("timestamp")),
    }


def validator_addresses(payload: Any) -> list[str]:
    if not isinstance(payload, Mapping) or not isinstance(payload.get("validators"), list):
        raise InvalidResponseShape("Expected an object with a 'validators' list")
    return [str(address) for address in payload["validators"]]


def validators_from_addresses(addresses: Iterable[str]) -> list[dict]:
    return [
        {"id": index, "validator_name": address, "commission": 0}
        for index, address in enumerate(addresses, start=1)
    ]


def split_validators(
    active_addresses: Iterable[str],
    staking_rows: Iterable[Mapping[str, Any]],
    operator_names: Mapping[str, str] | None = None,
) -> dict[str, list[dict]]:
    """Build the active/inactive partitions of the validator table.

    Active rows come from the upstream active list, enriched with the stored
    staking row for the same address. Stored rows whose address is not in the
    active list make up the inactive partition.
    """
    names = operator_names or {}
    stored: dict[str, Mapping[str, Any]] = {}
    for row in staking_rows:
        address = row.get("validator_name") or row.get("address")
        if address:
            stored.setdefault(address_key(str(address)), row)

    active = []
    seen = set()
    for row in validators_from_addresses(active_addresses):
        key = address_key(row["validator_name"])
        seen.add(key)
        match = stored.get(key)
        if match is not None:
            row["commission"] = match.get("commission") or 0
            row["delegated_shares"] = match.get("delegated_shares")
            row["apr"] = match.get("apr")
        row["name"] = names.get(row["validator_name"]) or (match or {}).get("operator_name") or "N/A"
        active.append(row)

    inactive = []
    for key, match in stored.items():
        if key in seen:
            continue
        address = str(match.get("validator_name") or match.get("address"))
        inactive.append(
            {
                "id": match.get("id"),
                "validator_name": address,
                "name": names.get(address) or match.get("operator_name") or "N/A",
                "commission": match.get("commission") or 0,
                "delegated_shares": match.get("delegated_shares"),
                "apr": match.get("apr"),
            }
        )
    return {"active": active, "inactive": inactive}
