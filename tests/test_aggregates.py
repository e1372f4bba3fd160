# tests/test_aggregates.py
import pytest

from validator_dash.aggregates import (
    average_commission,
    bucket_seconds,
    network_validator_count,
    preconf_activity,
    preconf_percentage,
    preconf_ratio_24h,
)


class TestAggregates:
    def test_average_commission(self, validators):
        assert average_commission(validators) == "2.00%"

    def test_average_commission_empty_set(self):
        assert average_commission([]) == "N/A"

    def test_missing_commission_counts_as_zero(self):
        assert average_commission([{"commission": 4}, {"commission": None}, {}]) == "1.33%"

    def test_preconf_percentage(self):
        # 100 addresses * 3 validators each out of the network total
        assert preconf_percentage(100, 3, 1147275) == "0.03"
        assert preconf_percentage(382425, 3, 1147275) == "100.00"

    def test_preconf_percentage_no_active_validators(self):
        assert preconf_percentage(0, 3, 1147275) == "0.00"

    def test_network_validator_count(self):
        assert network_validator_count(7, 3) == 21

    def test_preconf_ratio(self):
        assert preconf_ratio_24h(3600, 7200) == 0.5
        assert preconf_ratio_24h(0, 7200) == 0.0

    def test_preconf_ratio_rejects_non_positive_divisor(self):
        with pytest.raises(ValueError):
            preconf_ratio_24h(10, 0)

    @pytest.mark.parametrize(
        "span,expected",
        [(3600, 60), (12 * 3600, 300), (3 * 86400, 900), (20 * 86400, 3600), (60 * 86400, 10800)],
    )
    def test_bucket_seconds(self, span, expected):
        assert bucket_seconds(0, span) == expected


class TestPreconfActivity:
    def test_counts_per_bucket(self):
        txs = [
            {"timestamp": "2024-01-01T00:10:00Z"},
            {"timestamp": "2024-01-01T00:50:00Z"},
            {"timestamp": "2024-01-01T01:05:00Z"},
        ]
        frame = preconf_activity(txs, bucket_s=3600)
        assert frame["tx_count"].to_list() == [2, 1]
        assert frame["bucket_ts"].to_list() == [1704067200, 1704070800]
        assert "block_timestamp" in frame.columns

    def test_unparseable_timestamps_are_skipped(self):
        frame = preconf_activity([{"timestamp": "not a date"}, {"timestamp": None}, {}])
        assert frame.height == 0
        assert frame.columns == ["bucket_ts", "tx_count", "block_timestamp"]

    def test_bucket_width_follows_span(self, transactions):
        frame = preconf_activity(transactions)
        # one day apart: 5 minute buckets, one transaction each
        assert frame["tx_count"].to_list() == [1, 1]
