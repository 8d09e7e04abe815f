"""
Sortable, infinitely scrolling record table.

Rows arrive from the state as flat string dicts (see ``state.row_dict``):
the formatted cells plus ``id``, ``edit_value`` and the row feedback flags
``row_busy``, ``row_status``, ``row_removing`` and ``row_ghost``.
"""

import reflex as rx

from finops_ui.components.downloads import download_button
from finops_ui.components.error_panel import error_panel
from finops_ui.components.infinite_scroll import InfiniteScroll
from finops_ui.models.resources import Column, ResourceSpec
from finops_ui.views.row_status import DELETED, SAVED


def record_table(state: type[rx.State], spec: ResourceSpec) -> rx.Component:
    """
    Build the results area for ``spec``.

    Shows the error panel when the first page failed, an empty state when
    nothing matched, and the table otherwise.
    """
    return rx.box(
        rx.cond(
            state.load_failed,
            error_panel(state, spec),
            rx.cond(state.is_empty, _empty(state, spec), _results(state, spec)),
        ),
        id=f"{spec.name}-results",
    )


def _results(state, spec: ResourceSpec) -> rx.Component:
    return rx.box(
        rx.cond(state.loading & (state.rows.length() == 0), _loader(spec), None),
        InfiniteScroll.create(
            rx.table.root(
                rx.table.header(
                    rx.table.row(
                        *[_header_cell(state, spec, column) for column in spec.columns],
                        rx.table.column_header_cell(""),
                    )
                ),
                rx.table.body(rx.foreach(state.rows, lambda row: _row(state, spec, row))),
                variant="surface",
                class_name="record-table",
            ),
            data_length=state.rows.length(),
            next=state.load_more,
            has_more=state.has_more,
            loader=_more_loader(),
            end_message=_end_message(spec),
        ),
        class_name="results",
    )


def _header_cell(state, spec: ResourceSpec, column: Column) -> rx.Component:
    if not column.sortable:
        return rx.table.column_header_cell(column.label)
    return rx.table.column_header_cell(
        rx.hstack(
            rx.text(column.label),
            rx.cond(
                state.sort_by == column.key,
                rx.cond(
                    state.sort_order == "asc",
                    rx.icon("arrow-up", size=14),
                    rx.icon("arrow-down", size=14),
                ),
                rx.icon("arrow-up-down", size=14, class_name="sort-idle"),
            ),
            spacing="1",
            align="center",
        ),
        on_click=state.sort(column.key),
        class_name="sortable-header",
    )


def _row(state, spec: ResourceSpec, row) -> rx.Component:
    return rx.table.row(
        *[rx.table.cell(row[column.key]) for column in spec.columns],
        rx.table.cell(_row_actions(state, spec, row)),
        class_name=rx.cond(
            row["row_removing"] == "true",
            "record-row removing",
            rx.cond(row["row_busy"] == "true", "record-row busy", "record-row"),
        ),
    )


def _row_actions(state, spec: ResourceSpec, row) -> rx.Component:
    locked = (row["row_busy"] == "true") | (row["row_ghost"] == "true")
    actions = [
        rx.cond(row["row_busy"] == "true", rx.spinner(size="1"), None),
        rx.cond(
            row["row_status"] == SAVED,
            rx.icon("check", size=16, class_name="row-status saved"),
            rx.cond(
                row["row_status"] == DELETED,
                rx.icon("trash-2", size=16, class_name="row-status deleted"),
                None,
            ),
        ),
    ]
    if spec.edit_field and spec.supports_update:
        actions.append(_edit_dialog(state, spec, row, locked))
    if "mark_done" in spec.extra_paths:
        actions.append(
            rx.icon_button(
                rx.icon("circle-check", size=14),
                size="1",
                variant="ghost",
                title="Mark as done",
                disabled=locked,
                on_click=state.mark_done(row["id"]),
            )
        )
    if spec.name in ("profiler_profiles", "profiler_dashboard"):
        actions.append(download_button(row["id"]))
    if spec.supports_delete:
        actions.append(
            rx.icon_button(
                rx.icon("trash-2", size=14),
                size="1",
                variant="ghost",
                color_scheme="red",
                title=f"Delete {spec.label.lower()}",
                disabled=locked,
                on_click=state.delete_row(row["id"]),
            )
        )
    return rx.hstack(*actions, spacing="2", align="center", justify="end")


def _edit_dialog(state, spec: ResourceSpec, row, locked) -> rx.Component:
    column = next((c for c in spec.columns if c.key == spec.edit_field), None)
    label = column.label if column else spec.edit_field.replace("_", " ").title()
    return rx.dialog.root(
        rx.dialog.trigger(
            rx.icon_button(
                rx.icon("pencil", size=14),
                size="1",
                variant="ghost",
                title=f"Edit {label.lower()}",
                disabled=locked,
            )
        ),
        rx.dialog.content(
            rx.dialog.title(f"Edit {spec.label.lower()}"),
            rx.form(
                rx.vstack(
                    rx.el.input(type="hidden", name="id", value=row["id"]),
                    rx.text(label, class_name="field-label"),
                    rx.input(name="value", default_value=row["edit_value"], width="100%"),
                    rx.hstack(
                        rx.dialog.close(
                            rx.button("Cancel", type="button", variant="soft", color_scheme="gray")
                        ),
                        rx.dialog.close(rx.button("Save", type="submit")),
                        justify="end",
                        spacing="2",
                        width="100%",
                    ),
                    spacing="3",
                ),
                on_submit=state.save_row,
            ),
        ),
    )


def _empty(state, spec: ResourceSpec) -> rx.Component:
    noun = spec.plural.lower()
    return rx.box(
        rx.icon("inbox", class_name="empty-icon", size=60),
        rx.heading(f"No {noun} found", size="3", as_="h3"),
        rx.cond(
            state.search_value != "",
            rx.text(
                rx.text.span('No results match "'),
                rx.text.span(state.search_value),
                rx.text.span('". Try a different search term.'),
                class_name="muted",
            ),
            rx.text(f"No {noun} available.", class_name="muted"),
        ),
        class_name="card empty-state",
    )


def _loader(spec: ResourceSpec) -> rx.Component:
    return rx.box(
        rx.box(class_name="spinner"),
        rx.text(f"Loading {spec.plural.lower()}...", class_name="muted"),
        class_name="card loading-state",
    )


def _more_loader() -> rx.Component:
    return rx.box(
        rx.spinner(size="2"),
        class_name="load-more-container",
    )


def _end_message(spec: ResourceSpec) -> rx.Component:
    return rx.box(
        rx.text(f"All {spec.plural.lower()} loaded", class_name="load-more-hint end"),
        class_name="load-more-container",
    )
