"""Streamlit widgets for each registered field type."""

from typing import Any, Callable, Dict, Optional

import streamlit as st

from event_registration.form import FIELD_TYPE_REGISTRY, FieldSpec

WidgetFn = Callable[[FieldSpec, str, Any], Any]


def input_widget(spec: FieldSpec, key: str, value: Any) -> str:
    return st.text_input(
        spec.label or spec.name,
        value=value or "",
        placeholder=spec.placeholder,
        key=key,
    )


def textarea_widget(spec: FieldSpec, key: str, value: Any) -> str:
    return st.text_area(
        spec.label or spec.name,
        value=value or "",
        placeholder=spec.placeholder,
        key=key,
    )


def radio_widget(spec: FieldSpec, key: str, value: Any) -> Optional[str]:
    keys = [option for option, _ in spec.options]
    labels = dict(spec.options)
    return st.radio(
        spec.label or spec.name,
        keys,
        index=keys.index(value) if value in keys else None,
        format_func=lambda option: labels[option],
        horizontal=True,
        key=key,
    )


def button_widget(spec: FieldSpec, key: str, enabled: Any) -> bool:
    return st.button(
        spec.label or spec.name.capitalize(),
        key=key,
        disabled=not enabled,
        type="primary" if spec.type == "submit" else "secondary",
    )


WIDGET_REGISTRY: Dict[str, WidgetFn] = {
    "input": input_widget,
    "textarea": textarea_widget,
    "radio": radio_widget,
    "submit": button_widget,
    "reset": button_widget,
}

for _field_type in FIELD_TYPE_REGISTRY:
    if _field_type not in WIDGET_REGISTRY:
        raise RuntimeError(f"No widget registered for field type {_field_type!r}")
