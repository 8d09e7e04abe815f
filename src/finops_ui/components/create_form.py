"""
"New ..." button and dialog for list screens that accept records.

The inputs come from ``views.forms.CREATE_FIELDS``; pickers look up ids
through the resource autocomplete endpoints and keep the chosen label.
"""

import reflex as rx

from finops_ui.models.resources import ResourceSpec
from finops_ui.state import AUTOCOMPLETE_DEBOUNCE_MS, PAGE_STATES, RecordFormState
from finops_ui.views.forms import CREATE_FIELDS, FormField


def create_button(spec: ResourceSpec) -> rx.Component:
    """Button plus dialog; nothing for resources without a create form."""
    fields = CREATE_FIELDS.get(spec.name)
    if not spec.supports_create or not fields:
        return rx.fragment()
    page = PAGE_STATES[spec.name]
    return rx.fragment(
        rx.button(
            rx.icon("plus", size=16),
            f"New {spec.label.lower()}",
            on_click=RecordFormState.open_form(spec.name),
        ),
        rx.dialog.root(
            rx.dialog.content(
                rx.dialog.title(f"New {spec.label.lower()}"),
                rx.vstack(
                    *[_field(field) for field in fields],
                    rx.cond(
                        RecordFormState.charge_preview != "",
                        rx.text(RecordFormState.charge_preview, class_name="muted charge-breakdown"),
                        None,
                    ),
                    rx.hstack(
                        rx.dialog.close(
                            rx.button("Cancel", type="button", variant="soft", color_scheme="gray")
                        ),
                        rx.button(
                            rx.cond(page.creating, rx.spinner(size="1"), None),
                            "Save",
                            on_click=RecordFormState.submit,
                            disabled=page.creating,
                        ),
                        justify="end",
                        spacing="2",
                        width="100%",
                    ),
                    spacing="3",
                ),
            ),
            open=RecordFormState.open_resource == spec.name,
            on_open_change=RecordFormState.set_open,
        ),
    )


def _field(field: FormField) -> rx.Component:
    control = rx.box(
        rx.text(field.label, class_name="field-label"),
        _control(field),
        rx.cond(
            RecordFormState.errors.contains(field.key),
            rx.text(RecordFormState.errors[field.key], class_name="field-error"),
            None,
        ),
        width="100%",
    )
    if field.only_when is None:
        return control
    key, value = field.only_when
    return rx.cond(RecordFormState.values[key] == value, control, None)


def _control(field: FormField) -> rx.Component:
    value = RecordFormState.values[field.key]
    if field.kind == "choice":
        return rx.segmented_control.root(
            rx.segmented_control.item("Deposit", value="deposit"),
            rx.segmented_control.item("Withdraw", value="withdraw"),
            value=value,
            on_change=lambda v: RecordFormState.set_value(field.key, v),
        )
    if field.kind == "checkbox":
        return rx.checkbox(
            checked=value == "true",
            on_change=lambda checked: RecordFormState.set_flag(field.key, checked),
        )
    if field.kind == "textarea":
        return rx.text_area(
            value=value,
            on_change=lambda v: RecordFormState.set_value(field.key, v),
        )
    if field.kind == "picker":
        return _picker(field)
    return rx.input(
        type="number" if field.kind == "number" else "text",
        value=value,
        on_change=lambda v: RecordFormState.set_value(field.key, v),
    )


def _picker(field: FormField) -> rx.Component:
    return rx.box(
        rx.cond(
            RecordFormState.picked_labels.contains(field.key),
            rx.badge(RecordFormState.picked_labels[field.key], variant="soft"),
            None,
        ),
        rx.input(
            placeholder=f"Search {field.label.lower()}...",
            on_change=lambda v: RecordFormState.lookup(field.key, field.source, v),
            debounce=AUTOCOMPLETE_DEBOUNCE_MS,
        ),
        rx.foreach(
            RecordFormState.options[field.key],
            lambda option: rx.box(
                option["label"],
                class_name="picker-option",
                on_click=RecordFormState.pick(field.key, option["label"], option["value"]),
            ),
        ),
        class_name="picker",
    )
