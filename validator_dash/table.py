"""Client-side table pipeline: partition, filter, sort and paginate.

Every table on the dashboard (validators, preconf transactions, mainnet
transactions) is one ``TableConfig`` run through the same functions. The
functions are pure; ``TableState`` holds the per-view state and applies the
reset rules (a new query, sort field or partition sends the view back to
page 1).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Literal, Mapping, Sequence

Record = Mapping[str, Any]
Direction = Literal["asc", "desc"]

DEFAULT_PAGE_SIZE = 1000


@dataclass(frozen=True)
class SortSpec:
    key: str
    direction: Direction = "asc"


@dataclass(frozen=True)
class Column:
    label: str
    key: str
    sortable: bool = True


@dataclass(frozen=True)
class TableConfig:
    columns: tuple[Column, ...]
    searchable: tuple[str, ...]
    partitions: tuple[str, ...] = ()
    default_partition: str | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    empty_message: str = "No records found"

    def __post_init__(self):
        if self.page_size <= 0:
            raise ValueError("page_size must be > 0")
        if self.default_partition is not None and self.default_partition not in self.partitions:
            raise ValueError(f"unknown default partition {self.default_partition!r}")


@dataclass(frozen=True)
class Page:
    rows: list[dict]
    page: int
    page_count: int
    total: int

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count


def _search_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def filter_records(records: Sequence[Record], query: str, fields: Sequence[str]) -> list[Record]:
    needle = query.casefold() if query else ""
    if not needle:
        return list(records)
    matched = []
    for record in records:
        for name in fields:
            text = _search_text(record.get(name))
            if text is not None and needle in text.casefold():
                matched.append(record)
                break
    return matched


def _sort_key(value: Any) -> tuple:
    # Rank types so mixed columns never compare across types; None ranks last.
    if value is None:
        return (4,)
    if isinstance(value, bool):
        return (0, 0 if value else 1)
    if isinstance(value, (int, float, Decimal)):
        if isinstance(value, float) and math.isnan(value):
            return (4,)
        return (1, value)
    if isinstance(value, str):
        return (2, value.casefold(), value)
    return (3, str(value))


def sort_records(records: Sequence[Record], sort: SortSpec | None) -> list[Record]:
    """Stable sort; ``reverse`` keeps ties in source order and puts None first."""
    if sort is None:
        return list(records)
    return sorted(
        records,
        key=lambda record: _sort_key(record.get(sort.key)),
        reverse=sort.direction == "desc",
    )


def page_count(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def clamp_page(page: int, total: int, page_size: int) -> int:
    return min(max(1, page), page_count(total, page_size))


def paginate(records: Sequence[Record], page: int, page_size: int) -> Page:
    total = len(records)
    current = clamp_page(page, total, page_size)
    start = (current - 1) * page_size
    rows = [dict(record) for record in records[start : start + page_size]]
    return Page(rows=rows, page=current, page_count=page_count(total, page_size), total=total)


def render_page(
    records: Sequence[Record],
    query: str = "",
    sort: SortSpec | None = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    searchable: Sequence[str] = (),
) -> Page:
    filtered = filter_records(records, query, searchable)
    return paginate(sort_records(filtered, sort), page, page_size)


def next_sort(current: SortSpec | None, key: str) -> SortSpec:
    """Header click: ascending first, descending on a second click of the same field."""
    if current is not None and current.key == key and current.direction == "asc":
        return SortSpec(key, "desc")
    return SortSpec(key, "asc")


@dataclass
class TableState:
    partition: str | None = None
    query: str = ""
    sort: SortSpec | None = None
    page: int = 1

    @classmethod
    def for_config(cls, config: TableConfig) -> "TableState":
        return cls(partition=config.default_partition)

    def reset(self, config: TableConfig) -> None:
        self.partition = config.default_partition
        self.query = ""
        self.sort = None
        self.page = 1

    def set_query(self, query: str) -> None:
        if query != self.query:
            self.query = query
            self.page = 1

    def toggle_sort(self, key: str) -> None:
        self.sort = next_sort(self.sort, key)
        self.page = 1

    def set_partition(self, partition: str) -> None:
        if partition == self.partition:
            return
        self.partition = partition
        self.query = ""
        self.sort = None
        self.page = 1

    def go_to(self, page: int) -> None:
        self.page = max(1, page)

    def next_page(self, page_count: int) -> None:
        self.page = min(self.page + 1, max(1, page_count))

    def previous_page(self) -> None:
        self.page = max(1, self.page - 1)


@dataclass
class TableView:
    """A configured table bound to its data snapshot and view state."""

    config: TableConfig
    partitions: dict[str, list[Record]] = field(default_factory=dict)
    state: TableState = field(default_factory=TableState)

    @classmethod
    def create(cls, config: TableConfig, data: Sequence[Record] | Mapping[str, Sequence[Record]]) -> "TableView":
        view = cls(config=config, state=TableState.for_config(config))
        view.load(data)
        return view

    def load(self, data: Sequence[Record] | Mapping[str, Sequence[Record]]) -> None:
        """Swap in a new snapshot; view state goes back to its defaults."""
        if isinstance(data, Mapping):
            unknown = set(data) - set(self.config.partitions)
            if unknown:
                raise ValueError(f"unknown partitions: {sorted(unknown)}")
            self.partitions = {name: list(data.get(name, ())) for name in self.config.partitions}
        else:
            self.partitions = {self.config.default_partition or "": list(data)}
        self.state.reset(self.config)

    def source(self) -> list[Record]:
        key = self.state.partition if self.config.partitions else self.config.default_partition or ""
        return self.partitions.get(key or "", [])

    def render(self) -> Page:
        page = render_page(
            self.source(),
            query=self.state.query,
            sort=self.state.sort,
            page=self.state.page,
            page_size=self.config.page_size,
            searchable=self.config.searchable,
        )
        # Keep the stored page inside range when the data shrinks.
        self.state.page = page.page
        return page


class RequestGeneration:
    """Generation counter for discarding results of superseded loads.

    ``begin()`` hands out a token; ``is_current(token)`` is false once a newer
    load has started or the view was torn down with ``invalidate()``.
    """

    def __init__(self):
        self._generation = 0

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def invalidate(self) -> None:
        self._generation += 1

    def is_current(self, token: int) -> bool:
        return token == self._generation
