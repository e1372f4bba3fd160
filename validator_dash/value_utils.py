from __future__ import annotations

from decimal import Decimal, InvalidOperation


_WEI_PER_ETH = Decimal(10**18)


def wei_to_eth_display(wei_value: object, decimals: int = 4) -> str | None:
    """Render delegated shares (wei as int, numeric or string) as ETH."""
    if wei_value is None or isinstance(wei_value, bool):
        return None
    try:
        if isinstance(wei_value, str):
            text = wei_value.strip()
            if not text:
                return None
            wei = Decimal(text)
        else:
            wei = Decimal(wei_value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    eth = wei / _WEI_PER_ETH
    out = f"{eth:,.{decimals}f}".rstrip("0").rstrip(".")
    return f"{out} ETH" if out else "0 ETH"


def format_count(value: object) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return "…" if value is None else str(value)
    return f"{value:,.0f}"


def format_latency(value: object) -> str:
    if value is None:
        return "…"
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return f"{value:,.0f} ms"
    text = str(value).strip()
    if text.endswith("ms"):
        return text
    try:
        return f"{Decimal(text):,.0f} ms"
    except InvalidOperation:
        return f"{text} ms"


def format_apr(value: object) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return f"{Decimal(str(value)):.2f}%"
    except InvalidOperation:
        return str(value)


def format_validator_row(row: dict) -> dict:
    out = dict(row)
    if "delegated_shares" in out:
        out["delegated_shares"] = wei_to_eth_display(out.get("delegated_shares"))
    if "apr" in out:
        out["apr"] = format_apr(out.get("apr"))
    return out
