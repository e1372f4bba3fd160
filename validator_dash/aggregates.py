"""Summary numbers for the stat cards."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import polars as pl

from validator_dash.time_utils import parse_timestamp


def average_commission(validators: Sequence[Mapping[str, Any]]) -> str:
    if not validators:
        return "N/A"
    total = sum(float(v.get("commission") or 0) for v in validators)
    return f"{total / len(validators):.2f}%"


def network_validator_count(active_count: int, multiplier: int) -> int:
    return active_count * multiplier


def preconf_percentage(active_count: int, multiplier: int, total_network: int) -> str:
    if active_count <= 0:
        return "0.00"
    if total_network <= 0:
        raise ValueError("total_network must be > 0")
    return f"{network_validator_count(active_count, multiplier) / total_network * 100:.2f}"


def preconf_ratio_24h(count_24h: int | float, divisor: int) -> float:
    """Transactions seen in the last 24h relative to the expected blocks per day."""
    if divisor <= 0:
        raise ValueError("divisor must be > 0")
    return float(count_24h or 0) / divisor


def bucket_seconds(start_ts: int, end_ts: int) -> int:
    span = end_ts - start_ts
    if span <= 6 * 3600:
        return 60
    if span <= 24 * 3600:
        return 300
    if span <= 7 * 24 * 3600:
        return 900
    if span <= 30 * 24 * 3600:
        return 3600
    return 3 * 3600


def preconf_activity(transactions: Sequence[Mapping[str, Any]], bucket_s: int | None = None) -> pl.DataFrame:
    """Transaction counts per time bucket, oldest bucket first.

    Rows with an unparseable timestamp are left out. The bucket width is
    picked from the covered span when not given.
    """
    stamps = []
    for tx in transactions:
        parsed = parse_timestamp(tx.get("timestamp"))
        if parsed is not None:
            stamps.append(int(parsed.timestamp()))
    if not stamps:
        return pl.DataFrame(
            schema={"bucket_ts": pl.Int64, "tx_count": pl.UInt32, "block_timestamp": pl.Datetime("us", "UTC")}
        )

    width = bucket_s or bucket_seconds(min(stamps), max(stamps))
    return (
        pl.DataFrame({"ts": stamps}, schema={"ts": pl.Int64})
        .with_columns(((pl.col("ts") // width) * width).alias("bucket_ts"))
        .group_by("bucket_ts")
        .agg(pl.len().alias("tx_count"))
        .sort("bucket_ts")
        .with_columns(
            pl.from_epoch("bucket_ts", time_unit="s").dt.replace_time_zone("UTC").alias("block_timestamp")
        )
    )
