"""Client for the upstream validator/transaction service the API proxies."""

from __future__ import annotations

from typing import Any

from validator_dash.config import Settings, get_settings
from validator_dash.fetcher import ResilientFetcher, candidate_urls
from validator_dash.normalize import normalize_transactions, validator_addresses

ACTIVE_VALIDATORS_PATH = "/api/v1/validators/active"
TRANSACTIONS_PATH = "/api/v1/transactions"


class UpstreamClient:
    def __init__(self, settings: Settings | None = None, fetcher: ResilientFetcher | None = None):
        self.settings = settings or get_settings()
        self.fetcher = fetcher or ResilientFetcher(timeout=self.settings.http_timeout_seconds)

    def _get(self, path: str) -> Any:
        urls = candidate_urls(path, [self.settings.upstream_base_url])
        return self.fetcher.fetch_first_success(urls).payload

    def active_validators(self) -> dict[str, list[str]]:
        return {"validators": validator_addresses(self._get(ACTIVE_VALIDATORS_PATH))}

    def transactions(self, limit: int | None = None) -> list[dict]:
        return normalize_transactions(self._get(TRANSACTIONS_PATH), limit=limit)
