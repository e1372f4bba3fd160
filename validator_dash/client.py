"""Dashboard-side access to the HTTP API, with ordered fallback across bases."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from validator_dash.config import Settings, get_settings
from validator_dash.errors import InvalidResponseShape
from validator_dash.fetcher import ResilientFetcher, candidate_urls
from validator_dash.normalize import validator_addresses

logger = logging.getLogger(__name__)


def chunked(items: Sequence[str], size: int) -> list[list[str]]:
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


class DashboardClient:
    def __init__(self, settings: Settings | None = None, fetcher: ResilientFetcher | None = None):
        self.settings = settings or get_settings()
        self.fetcher = fetcher or ResilientFetcher(timeout=self.settings.http_timeout_seconds)

    def _request(self, path: str, method: str = "GET", json: Any = None) -> Any:
        urls = candidate_urls(path, self.settings.api_bases)
        return self.fetcher.fetch_first_success(urls, method=method, json=json).payload

    def validators(self) -> list[str]:
        return validator_addresses(self._request("/api/validators"))

    def staking_data(self) -> list[dict]:
        payload = self._request("/api/staking-data")
        if not isinstance(payload, list):
            raise InvalidResponseShape("Expected a list of validator rows")
        return payload

    def statistics(self) -> dict:
        payload = self._request("/api/statistics")
        if not isinstance(payload, Mapping):
            raise InvalidResponseShape("Expected a statistics object")
        return dict(payload)

    def preconf_transactions(self) -> dict:
        payload = self._request("/api/preconf-transactions")
        if not isinstance(payload, Mapping) or not isinstance(payload.get("transactions"), list):
            raise InvalidResponseShape("Invalid data format received from server")
        return {
            "transactions": payload["transactions"],
            "totalPreconfTxsIn24Hours": payload.get("totalPreconfTxsIn24Hours") or 0,
            "label": payload.get("label", ""),
        }

    def preconf_stats(self) -> dict:
        payload = self._request("/api/preconf-stats")
        if not isinstance(payload, Mapping):
            raise InvalidResponseShape("Expected a preconf stats object")
        return {
            "totalPreconfs": payload.get("totalPreconfs") or 0,
            "totalPreconfTxsIn24Hours": payload.get("totalPreconfTxsIn24Hours") or 0,
        }

    def mainnet_transactions(self) -> list[dict]:
        payload = self._request("/api/mainnet-transactions")
        if not isinstance(payload, list):
            raise InvalidResponseShape("Expected a list of transactions")
        return payload

    def operator_names(self, addresses: Sequence[str]) -> dict[str, str]:
        """Look up operator names, one POST per batch of addresses."""
        names: dict[str, str] = {}
        batches = chunked(list(addresses), self.settings.operator_batch_size)
        for number, batch in enumerate(batches, start=1):
            payload = self._request("/api/operator-names", method="POST", json={"addresses": batch})
            if not isinstance(payload, Mapping):
                raise InvalidResponseShape("Expected an address to name mapping")
            names.update({str(key): str(value) for key, value in payload.items()})
            logger.info("Operator names batch %d/%d: %d addresses", number, len(batches), len(batch))
        return names
