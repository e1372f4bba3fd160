"""Ordered-fallback JSON fetching over a list of candidate URLs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import requests

from validator_dash.errors import InvalidResponseShape, NetworkFailure, UpstreamHttpError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


@dataclass(frozen=True)
class FetchResult:
    payload: Any
    source_url: str


def candidate_urls(path: str, bases: Iterable[str]) -> list[str]:
    """Join ``path`` onto each base, keeping order and dropping duplicates."""
    suffix = path if path.startswith("/") else f"/{path}"
    urls: list[str] = []
    for base in bases:
        url = f"{base.rstrip('/')}{suffix}"
        if url not in urls:
            urls.append(url)
    return urls


class ResilientFetcher:
    """Try each candidate URL once, in order, and return the first JSON success.

    A candidate succeeds only when it answers 2xx with a body that parses as
    JSON. Candidates are never raced; the next one is attempted only after the
    previous round trip has finished. When every candidate fails a single
    ``NetworkFailure`` is raised carrying the last underlying error.
    """

    def __init__(self, timeout: float = 10.0, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    def _attempt(self, url: str, method: str, json_body: Any) -> Any:
        response = self.session.request(method, url, json=json_body, timeout=self.timeout)
        if not 200 <= response.status_code < 300:
            raise UpstreamHttpError(response.status_code, url, response.reason or "")
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidResponseShape(f"Response from {url} is not valid JSON") from exc

    def fetch_first_success(
        self,
        urls: Sequence[str],
        method: str = "GET",
        json: Any = None,
    ) -> FetchResult:
        if not urls:
            raise NetworkFailure([], None)

        last_error: BaseException | None = None
        for url in urls:
            logger.info("Attempting to fetch from: %s", url)
            try:
                payload = self._attempt(url, method, json)
            except (requests.RequestException, UpstreamHttpError, InvalidResponseShape) as exc:
                last_error = exc
                logger.warning("Failed to fetch from %s: %s", url, exc)
                continue
            logger.info("Successfully fetched from: %s", url)
            return FetchResult(payload=payload, source_url=url)

        logger.error("All endpoints failed: %s", ", ".join(urls))
        raise NetworkFailure(list(urls), last_error)

    def close(self) -> None:
        self.session.close()


def fetch_first_success(
    urls: Sequence[str],
    method: str = "GET",
    json: Any = None,
    timeout: float = 10.0,
) -> FetchResult:
    """One-shot helper around :class:`ResilientFetcher`."""
    fetcher = ResilientFetcher(timeout=timeout)
    try:
        return fetcher.fetch_first_success(urls, method=method, json=json)
    finally:
        fetcher.close()
