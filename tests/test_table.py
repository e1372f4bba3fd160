# tests/test_table.py
import pytest

from validator_dash.table import (
    Column,
    RequestGeneration,
    SortSpec,
    TableConfig,
    TableState,
    TableView,
    filter_records,
    next_sort,
    page_count,
    paginate,
    render_page,
    sort_records,
)


def names(rows, key="validator_name"):
    return [row[key] for row in rows]


class TestFilter:
    def test_query_matches_hash_substring(self, transactions):
        """Only the record whose hash contains the query survives"""
        result = filter_records(transactions, "abc", ("tx_hash", "timestamp", "slot"))
        assert result == [transactions[0]]

    def test_empty_query_is_identity(self, transactions):
        assert filter_records(transactions, "", ("tx_hash",)) == transactions

    def test_matching_is_case_insensitive(self, validators):
        assert names(filter_records(validators, "0xaa", ("validator_name",))) == ["0xAA"]
        assert names(filter_records(validators, "0XBB", ("validator_name",))) == ["0xbb"]

    def test_numbers_match_on_decimal_string(self, transactions):
        assert filter_records(transactions, "11", ("slot",)) == [transactions[1]]
        assert filter_records(transactions, "1", ("slot",)) == transactions

    def test_integral_floats_match_without_decimal_point(self):
        rows = [{"commission": 5.0}, {"commission": 5.5}]
        assert filter_records(rows, "5.", ("commission",)) == [rows[1]]

    def test_none_and_missing_fields_never_match(self):
        rows = [{"name": None}, {}]
        assert filter_records(rows, "none", ("name",)) == []

    def test_filter_is_idempotent(self, transactions):
        once = filter_records(transactions, "0x", ("tx_hash",))
        assert filter_records(once, "0x", ("tx_hash",)) == once

    def test_unsearched_fields_are_ignored(self, transactions):
        assert filter_records(transactions, "2024", ("tx_hash",)) == []


class TestSort:
    def test_commission_ascending_and_descending(self, validators):
        assert names(sort_records(validators, SortSpec("commission", "asc"))) == ["0xAA", "0xbb"]
        assert names(sort_records(validators, SortSpec("commission", "desc"))) == ["0xbb", "0xAA"]

    def test_no_spec_preserves_source_order(self, validators):
        reversed_rows = list(reversed(validators))
        assert sort_records(reversed_rows, None) == reversed_rows

    def test_none_last_ascending_first_descending(self):
        rows = [{"k": None, "i": 0}, {"k": 2, "i": 1}, {"k": 1, "i": 2}]
        assert [r["i"] for r in sort_records(rows, SortSpec("k", "asc"))] == [2, 1, 0]
        assert [r["i"] for r in sort_records(rows, SortSpec("k", "desc"))] == [0, 1, 2]

    def test_true_sorts_before_false_ascending(self):
        rows = [{"ok": False}, {"ok": True}, {"ok": False}]
        assert [r["ok"] for r in sort_records(rows, SortSpec("ok"))] == [True, False, False]

    def test_numbers_compare_numerically(self):
        rows = [{"slot": 100}, {"slot": 9}, {"slot": 20.5}]
        assert [r["slot"] for r in sort_records(rows, SortSpec("slot"))] == [9, 20.5, 100]

    def test_strings_ignore_case(self):
        rows = [{"n": "beta"}, {"n": "Alpha"}, {"n": "alpha2"}]
        assert [r["n"] for r in sort_records(rows, SortSpec("n"))] == ["Alpha", "alpha2", "beta"]

    def test_sort_is_stable_for_ties(self):
        rows = [{"c": 1, "i": i} for i in range(5)]
        assert [r["i"] for r in sort_records(rows, SortSpec("c", "asc"))] == [0, 1, 2, 3, 4]
        assert [r["i"] for r in sort_records(rows, SortSpec("c", "desc"))] == [0, 1, 2, 3, 4]

    def test_sorting_twice_is_idempotent(self, validators):
        spec = SortSpec("commission", "desc")
        once = sort_records(validators, spec)
        assert sort_records(once, spec) == once

    def test_source_is_not_mutated(self, validators):
        original = list(validators)
        sort_records(validators, SortSpec("commission", "desc"))
        assert validators == original

    def test_next_sort_toggles(self):
        first = next_sort(None, "slot")
        assert first == SortSpec("slot", "asc")
        second = next_sort(first, "slot")
        assert second == SortSpec("slot", "desc")
        assert next_sort(second, "slot") == SortSpec("slot", "asc")
        assert next_sort(second, "tx_hash") == SortSpec("tx_hash", "asc")


class TestPagination:
    @pytest.mark.parametrize(
        "total,size,expected",
        [(0, 1000, 1), (1, 1000, 1), (1000, 1000, 1), (1001, 1000, 2), (10, 3, 4)],
    )
    def test_page_count(self, total, size, expected):
        assert page_count(total, size) == expected

    def test_slices_at_boundary(self):
        rows = [{"i": i} for i in range(7)]
        first = paginate(rows, 1, 3)
        last = paginate(rows, 3, 3)
        assert [r["i"] for r in first.rows] == [0, 1, 2]
        assert [r["i"] for r in last.rows] == [6]
        assert last.page_count == 3
        assert first.has_next and not last.has_next

    def test_page_is_clamped_when_data_shrinks(self):
        rows = [{"i": i} for i in range(4)]
        page = paginate(rows, 9, 3)
        assert page.page == 2
        assert [r["i"] for r in page.rows] == [3]

    def test_empty_collection_renders_single_empty_page(self):
        page = render_page([], query="x", sort=SortSpec("slot"), page=3, page_size=1000, searchable=("tx_hash",))
        assert page.rows == []
        assert page.page == 1
        assert page.page_count == 1
        assert page.is_empty
        assert not page.has_previous and not page.has_next

    def test_page_count_follows_filtered_total(self, transactions):
        page = render_page(transactions, query="abc", page_size=1, searchable=("tx_hash",))
        assert page.total == 1
        assert page.page_count == 1


class TestTableState:
    @pytest.fixture
    def config(self):
        return TableConfig(
            columns=(Column("Validator Name", "validator_name"), Column("Commission", "commission")),
            searchable=("validator_name",),
            partitions=("active", "inactive"),
            default_partition="active",
            page_size=1,
        )

    def test_defaults_from_config(self, config):
        state = TableState.for_config(config)
        assert state.partition == "active"
        assert state.query == "" and state.sort is None and state.page == 1

    def test_query_change_resets_page(self):
        state = TableState(page=4)
        state.set_query("0x")
        assert state.page == 1

    def test_same_query_keeps_page(self):
        state = TableState(query="0x", page=4)
        state.set_query("0x")
        assert state.page == 4

    def test_sort_change_resets_page(self):
        state = TableState(page=3)
        state.toggle_sort("commission")
        assert state.page == 1
        assert state.sort == SortSpec("commission", "asc")

    def test_partition_change_resets_everything(self):
        state = TableState(partition="active", query="0x", sort=SortSpec("commission"), page=2)
        state.set_partition("inactive")
        assert state == TableState(partition="inactive")

    def test_page_moves_keep_filter_and_sort(self):
        state = TableState(query="0x", sort=SortSpec("commission", "desc"))
        state.next_page(3)
        state.next_page(3)
        state.next_page(3)
        assert state.page == 3
        state.previous_page()
        assert state.page == 2
        assert state.query == "0x"
        assert state.sort == SortSpec("commission", "desc")

    def test_previous_page_stops_at_one(self):
        state = TableState()
        state.previous_page()
        assert state.page == 1

    def test_view_switches_partition(self, config, validators):
        view = TableView.create(config, {"active": validators, "inactive": [{"validator_name": "0xcc"}]})
        assert names(view.render().rows) == ["0xAA"]
        view.state.set_partition("inactive")
        assert names(view.render().rows) == ["0xcc"]

    def test_view_clamps_stored_page(self, config, validators):
        view = TableView.create(config, {"active": validators})
        view.state.go_to(5)
        page = view.render()
        assert page.page == 2
        assert view.state.page == 2

    def test_view_load_resets_state(self, config, validators):
        view = TableView.create(config, {"active": validators})
        view.state.set_query("bb")
        view.state.toggle_sort("commission")
        view.load({"active": validators[:1]})
        assert view.state == TableState(partition="active")

    def test_view_rejects_unknown_partition(self, config):
        with pytest.raises(ValueError):
            TableView.create(config, {"pending": []})

    def test_unpartitioned_view(self, transactions):
        config = TableConfig(columns=(Column("Slot", "slot"),), searchable=("tx_hash",))
        view = TableView.create(config, transactions)
        view.state.toggle_sort("slot")
        view.state.toggle_sort("slot")
        assert [r["slot"] for r in view.render().rows] == [11, 10]

    def test_config_validates_page_size(self):
        with pytest.raises(ValueError):
            TableConfig(columns=(), searchable=(), page_size=0)


class TestRequestGeneration:
    def test_newer_load_supersedes_older(self):
        generation = RequestGeneration()
        first = generation.begin()
        second = generation.begin()
        assert not generation.is_current(first)
        assert generation.is_current(second)

    def test_invalidate_discards_in_flight_result(self):
        generation = RequestGeneration()
        token = generation.begin()
        generation.invalidate()
        assert not generation.is_current(token)
