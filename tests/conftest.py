import pytest

from validator_dash.config import Settings


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self._text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


@pytest.fixture
def settings():
    """Settings with two remote API bases and a small operator batch size"""
    return Settings(
        database_url=None,
        database_ssl=False,
        db_pool_min_size=1,
        db_pool_max_size=2,
        upstream_base_url="https://upstream.test",
        local_api_url=None,
        remote_api_urls=("https://primary.test", "https://mirror.test"),
        http_timeout_seconds=1.0,
        validator_multiplier=3,
        total_network_validators=1147275,
        blocks_per_day=7200,
        table_page_size=1000,
        operator_batch_size=2,
        mainnet_tx_limit=100,
        stats_refresh_seconds=21600,
        log_level="INFO",
    )


@pytest.fixture
def validators():
    return [
        {"id": 1, "validator_name": "0xAA", "commission": 1},
        {"id": 2, "validator_name": "0xbb", "commission": 3},
    ]


@pytest.fixture
def transactions():
    return [
        {"tx_hash": "0xabc", "slot": 10, "timestamp": "2024-01-01T00:00:00Z"},
        {"tx_hash": "0xdef", "slot": 11, "timestamp": "2024-01-02T00:00:00Z"},
    ]


@pytest.fixture
def make_response():
    return FakeResponse
