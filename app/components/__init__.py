from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import streamlit as st
from pyrsistent import thaw

from event_registration.animation import DeferredScheduler
from event_registration.form import (
    FieldSpec,
    FormState,
    ValidationResult,
    after_submit,
    apply_validation,
    change_value,
    final_buttons,
    initial_state,
    input_fields,
    is_enabled,
    reset_form,
    visible_message,
)
from event_registration.logo import Logo

from .fields import WIDGET_REGISTRY

ValidateFn = Callable[[Mapping[str, Any]], ValidationResult]
SubmitFn = Callable[[Mapping[str, Any], str], Optional[str]]

__all__ = ["display_logo", "render_form"]


def display_logo(logo: Logo, scheduler: DeferredScheduler) -> None:
    """Advance the animation by its pending step and draw the logo."""
    scheduler.run_pending()
    if logo.layout.is_empty:
        return
    st.image(logo.image(), use_container_width=False)


def render_form(
    fields: Tuple[FieldSpec, ...],
    form_class: str,
    validate: ValidateFn,
    handle_submit: SubmitFn,
    disabled_message: Optional[str] = None,
) -> None:
    """Render ``fields`` with live validation and the final button row."""
    state_key = f"{form_class}_state"
    version_key = f"{form_class}_version"
    if state_key not in st.session_state:
        first = initial_state(fields)
        st.session_state[state_key] = apply_validation(first, validate(first.values))
        st.session_state[version_key] = 0

    state: FormState = st.session_state[state_key]
    version: int = st.session_state[version_key]

    if state.alert:
        st.success(state.alert)
    if disabled_message:
        st.warning(disabled_message)

    containers: Dict[str, Any] = {}
    new_state = state
    for spec in input_fields(fields):
        containers[spec.name] = st.container()
        with containers[spec.name]:
            widget = WIDGET_REGISTRY[spec.type]
            value = widget(
                spec, f"{spec.field_id(form_class)}-{version}", state.values.get(spec.name)
            )
        if value is None:
            value = ""
        if value != new_state.values.get(spec.name):
            new_state = change_value(new_state, spec.name, value)

    if new_state.values != state.values:
        new_state = apply_validation(new_state, validate(thaw(new_state.values)))
    st.session_state[state_key] = new_state

    for name, container in containers.items():
        message = visible_message(new_state, name)
        if message:
            container.caption(f":red[{message}]")

    buttons = final_buttons(fields, new_state)
    columns = st.columns(len(buttons))
    for column, (action_type, button) in zip(columns, buttons.items()):
        with column:
            clicked = WIDGET_REGISTRY[action_type](
                button,
                f"{button.field_id(form_class)}-{version}",
                is_enabled(new_state, button) and not disabled_message,
            )
        if not clicked:
            continue
        if action_type == "reset":
            fresh = reset_form(fields)
            st.session_state[state_key] = apply_validation(fresh, validate(fresh.values))
        else:
            alert = handle_submit(thaw(new_state.values), button.name)
            fresh = after_submit(fields, alert)
            st.session_state[state_key] = apply_validation(fresh, validate(fresh.values))
        st.session_state[version_key] = version + 1
        st.rerun()

    submit_message = visible_message(new_state, "submit")
    if submit_message:
        st.caption(f":red[{submit_message}]")
