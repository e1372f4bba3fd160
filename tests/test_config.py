# tests/test_config.py
import pytest

from validator_dash.config import load_settings
from validator_dash.errors import ConfigError

ENV_VARS = (
    "DATABASE_URL",
    "DATABASE_SSL",
    "DASHBOARD_LOCAL_API",
    "DASHBOARD_API_URLS",
    "BLOCKS_PER_DAY",
    "TABLE_PAGE_SIZE",
    "HTTP_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "API_HOST",
    "API_PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        settings = load_settings()
        assert settings.blocks_per_day == 7200
        assert settings.table_page_size == 1000
        assert settings.validator_multiplier == 3
        assert settings.total_network_validators == 1147275
        assert settings.stats_refresh_seconds == 6 * 60 * 60
        assert (settings.api_host, settings.api_port) == ("0.0.0.0", 8000)
        assert settings.api_bases == [
            "https://dashboard.interstate.so",
            "https://directory-validators.vercel.app",
        ]

    def test_local_api_goes_first(self, monkeypatch):
        monkeypatch.setenv("DASHBOARD_LOCAL_API", "http://localhost:8000/")
        monkeypatch.setenv("DASHBOARD_API_URLS", "https://a.test, https://b.test/")
        settings = load_settings()
        assert settings.api_bases == ["http://localhost:8000", "https://a.test", "https://b.test"]

    def test_database_ssl_flag(self, monkeypatch):
        monkeypatch.setenv("DATABASE_SSL", "true")
        assert load_settings().database_ssl is True

    @pytest.mark.parametrize(
        "name,value",
        [
            ("BLOCKS_PER_DAY", "0"),
            ("TABLE_PAGE_SIZE", "-5"),
            ("BLOCKS_PER_DAY", "many"),
            ("HTTP_TIMEOUT_SECONDS", "0"),
            ("API_PORT", "70000"),
        ],
    )
    def test_invalid_values_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ConfigError):
            load_settings()

    def test_no_api_bases(self, monkeypatch):
        monkeypatch.setenv("DASHBOARD_API_URLS", " , ")
        with pytest.raises(ConfigError):
            load_settings()

    def test_api_bind_address(self, monkeypatch):
        monkeypatch.setenv("API_HOST", "127.0.0.1")
        monkeypatch.setenv("API_PORT", "9100")
        settings = load_settings()
        assert (settings.api_host, settings.api_port) == ("127.0.0.1", 9100)
