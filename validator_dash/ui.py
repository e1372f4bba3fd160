"""Streamlit building blocks shared by the dashboard pages."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

import streamlit as st

from validator_dash.table import Page, RequestGeneration, TableConfig, TableView


def stat_card(column, title: str, value: Any) -> None:
    with column:
        with st.container(border=True):
            st.caption(title)
            st.markdown(f"### {value}")


def error_panel(
    title: str,
    message: str,
    causes: Sequence[str] = (),
    retry_key: str | None = None,
    snapshot_key: str | None = None,
) -> None:
    """Inline error with an optional retry that drops cached loads and reruns."""
    st.error(f"**{title}**\n\n{message}")
    if causes:
        st.markdown("This could be due to:\n" + "\n".join(f"- {cause}" for cause in causes))
    if retry_key and st.button("Retry", key=retry_key):
        if snapshot_key:
            discard_snapshot(snapshot_key)
        st.cache_data.clear()
        st.rerun()


def load_snapshot(key: str, loader: Callable[[], Any]) -> Any:
    """Run ``loader`` and store its result unless the view was discarded meanwhile."""
    generation = st.session_state.setdefault(f"{key}_generation", RequestGeneration())
    token = generation.begin()
    data = loader()
    if generation.is_current(token):
        st.session_state[f"{key}_snapshot"] = data
    return data


def discard_snapshot(key: str) -> None:
    """Drop the stored snapshot and make any load still holding a token stale."""
    generation = st.session_state.get(f"{key}_generation")
    if generation is not None:
        generation.invalidate()
    st.session_state.pop(f"{key}_snapshot", None)
    st.session_state.pop(f"{key}_version", None)


def _table_view(key: str, config: TableConfig, data, version: str) -> TableView:
    view = st.session_state.get(f"{key}_view")
    if view is None or st.session_state.get(f"{key}_version") != version:
        view = TableView.create(config, data)
        st.session_state[f"{key}_view"] = view
        st.session_state[f"{key}_version"] = version
        st.session_state[f"{key}_query"] = ""
    return view


def _on_partition(view: TableView, key: str, partition: str) -> None:
    view.state.set_partition(partition)
    st.session_state[f"{key}_query"] = ""


def _on_query(view: TableView, key: str) -> None:
    view.state.set_query(st.session_state.get(f"{key}_query", ""))


def sortable_table(
    key: str,
    config: TableConfig,
    data: Sequence[Mapping[str, Any]] | Mapping[str, Sequence[Mapping[str, Any]]],
    version: str,
    format_row: Callable[[dict], dict] | None = None,
    search_placeholder: str = "Search...",
) -> Page:
    """Render one configured table with partition toggle, search, sort and pagination.

    ``version`` identifies the data snapshot; a new version resets the view.
    """
    view = _table_view(key, config, data, version)
    state = view.state

    if config.partitions:
        cols = st.columns(len(config.partitions) + 4)
        for col, partition in zip(cols, config.partitions):
            col.button(
                partition.capitalize(),
                key=f"{key}_partition_{partition}",
                type="primary" if state.partition == partition else "secondary",
                on_click=_on_partition,
                args=(view, key, partition),
            )

    if config.searchable:
        st.text_input(
            "Search",
            key=f"{key}_query",
            placeholder=search_placeholder,
            label_visibility="collapsed",
            on_change=_on_query,
            args=(view, key),
        )

    sortable = [column for column in config.columns if column.sortable]
    if sortable:
        header = st.columns(len(sortable))
        for col, column in zip(header, sortable):
            marker = ""
            if state.sort is not None and state.sort.key == column.key:
                marker = " ▲" if state.sort.direction == "asc" else " ▼"
            col.button(
                f"{column.label}{marker}",
                key=f"{key}_sort_{column.key}",
                on_click=state.toggle_sort,
                args=(column.key,),
                width="stretch",
            )

    page = view.render()
    if page.is_empty:
        st.info(config.empty_message)
    else:
        rows = [format_row(row) if format_row else row for row in page.rows]
        st.dataframe(
            [{column.label: row.get(column.key) for column in config.columns} for row in rows],
            width="stretch",
            hide_index=True,
        )

    left, middle, right = st.columns([1, 2, 1])
    left.button(
        "‹",
        key=f"{key}_prev",
        disabled=not page.has_previous,
        on_click=state.previous_page,
    )
    middle.caption(f"Page {page.page} of {page.page_count} · {page.total:,} records")
    right.button(
        "›",
        key=f"{key}_next",
        disabled=not page.has_next,
        on_click=state.next_page,
        args=(page.page_count,),
    )
    return page
