"""Registry-driven input forms.

A form is a tuple of :class:`FieldSpec` values whose ``type`` must be a key of
:data:`FIELD_TYPE_REGISTRY`. The UI layer maps each type to a widget; this
module holds everything that is independent of the UI:

* :class:`FormState` is an immutable snapshot of entered values, touched
  fields, validation messages, enabled actions and an optional alert. The
  ``change_value`` / ``apply_validation`` / ``reset_form`` / ``after_submit``
  functions return new snapshots, never mutating the old one.
* :func:`final_buttons` decides which submit and reset buttons are shown.
  Validation lists the enabled *actions* by field name, so a form can offer
  ``submit`` for new data and ``update`` for known data.
* :func:`validate_registration` and :func:`submit_registration` implement the
  attendee registration form on top of :class:`AttendeeClient`.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import httpx
from pyrsistent import PMap, PSet, pmap, pset

from event_registration.client import AttendeeClient, ClientError, LookupResult

ACTION_TYPES: Tuple[str, ...] = ("submit", "reset")


@dataclass(frozen=True)
class FieldType:
    """Behaviour of one field type.

    Attributes:
        name: Registry key.
        is_action: True for buttons rendered in the final row.
        needs_options: True if the field chooses among ``options``.
    """

    name: str
    is_action: bool = False
    needs_options: bool = False


FIELD_TYPE_REGISTRY: Dict[str, FieldType] = {
    "input": FieldType("input"),
    "textarea": FieldType("textarea"),
    "radio": FieldType("radio", needs_options=True),
    "submit": FieldType("submit", is_action=True),
    "reset": FieldType("reset", is_action=True),
}
"""Field type name -> behaviour."""


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: str = "input"
    label: Optional[str] = None
    placeholder: Optional[str] = None
    options: Tuple[Tuple[str, str], ...] = ()
    value: Any = ""
    focus: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field name must not be empty")
        field_type = FIELD_TYPE_REGISTRY.get(self.type)
        if field_type is None:
            raise ValueError(f'Unsupported field type "{self.type}" ({self.name})')
        if field_type.needs_options and not self.options:
            raise ValueError(f"Field {self.name!r} of type {self.type!r} needs options")
        for key, text in self.options:
            if not key or not text:
                raise ValueError(f"Invalid option for field {self.name!r}: {(key, text)}")

    @property
    def is_action(self) -> bool:
        return FIELD_TYPE_REGISTRY[self.type].is_action

    def field_id(self, form_class: Optional[str] = None) -> str:
        return f"{form_class or 'form'}-{self.name}"


DEFAULT_SUBMIT = FieldSpec(name="submit", type="submit", label="Submit")


@dataclass(frozen=True)
class ValidationResult:
    actions: Tuple[str, ...]
    messages: PMap[str, Optional[str]] = field(default_factory=pmap)


@dataclass(frozen=True)
class FormState:
    """Snapshot of a form.

    Attributes:
        values: Field name -> entered value.
        touched: Names of fields the user changed.
        messages: Field name (or ``"submit"``) -> validation message.
        actions: Names of action fields currently enabled.
        alert: Message shown above the form after a submit.
    """

    values: PMap[str, Any] = field(default_factory=pmap)
    touched: PSet[str] = field(default_factory=pset)
    messages: PMap[str, Optional[str]] = field(default_factory=pmap)
    actions: Tuple[str, ...] = ("submit",)
    alert: Optional[str] = None


def initial_state(fields: Tuple[FieldSpec, ...]) -> FormState:
    return FormState(
        values=pmap({f.name: f.value for f in fields if not f.is_action})
    )


def change_value(state: FormState, name: str, value: Any) -> FormState:
    """Record a user edit of ``name``."""
    if name not in state.values:
        raise KeyError(f"Unknown field: {name}")
    return replace(
        state, values=state.values.set(name, value), touched=state.touched.add(name)
    )


def apply_validation(state: FormState, result: ValidationResult) -> FormState:
    return replace(state, actions=tuple(result.actions), messages=pmap(result.messages))


def reset_form(fields: Tuple[FieldSpec, ...]) -> FormState:
    return initial_state(fields)


def after_submit(fields: Tuple[FieldSpec, ...], alert: Optional[str]) -> FormState:
    """Fresh form carrying the submit handler's message, if any."""
    return replace(initial_state(fields), alert=alert or None)


def visible_message(state: FormState, name: str) -> Optional[str]:
    """Message for ``name``, shown only once the field was touched.

    Messages for ``submit`` are always shown.
    """
    if name != "submit" and name not in state.touched:
        return None
    return state.messages.get(name)


def input_fields(fields: Tuple[FieldSpec, ...]) -> Tuple[FieldSpec, ...]:
    return tuple(f for f in fields if not f.is_action)


def final_buttons(
    fields: Tuple[FieldSpec, ...], state: FormState
) -> Dict[str, FieldSpec]:
    """Pick the submit and reset buttons for the final row.

    For each action type the first *enabled* field wins, then the first field
    of that type; a form without any submit field gets a default one.
    """
    buttons: Dict[str, FieldSpec] = {}
    for action_type in ACTION_TYPES:
        candidates = [f for f in fields if f.type == action_type]
        active = [f for f in candidates if f.name in state.actions]
        if active:
            buttons[action_type] = active[0]
        elif candidates:
            buttons[action_type] = candidates[0]
        elif action_type == "submit":
            buttons[action_type] = DEFAULT_SUBMIT
    return buttons


def is_enabled(state: FormState, button: FieldSpec) -> bool:
    return button.name in state.actions


# -----------------------------
# Attendee registration form
# -----------------------------

ATTENDING_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("yes", "Yes"),
    ("no", "No"),
    ("maybe", "Maybe"),
)

REGISTRATION_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(
        name="firstname",
        label="Firstname:",
        placeholder="Type in your firstname.",
        focus=True,
    ),
    FieldSpec(name="lastname", label="Lastname:", placeholder="Type in your lastname."),
    FieldSpec(
        name="attending",
        type="radio",
        label="Are you going to attend the conference?",
        options=ATTENDING_OPTIONS,
    ),
    FieldSpec(name="submit", type="submit", label="Submit"),
    FieldSpec(name="update", type="submit", label="Update"),
    FieldSpec(name="reset", type="reset", label="Reset"),
)

ALREADY_SAVED_MESSAGE = "Your answer was already saved, before."

LookupFn = Callable[[str, str], LookupResult]


def _text(values: Mapping[str, Any], name: str) -> str:
    value = values.get(name)
    return value.strip() if isinstance(value, str) else ""


def validate_registration(
    values: Mapping[str, Any], lookup: Optional[LookupFn]
) -> ValidationResult:
    """Check the registration input, asking the server about the name.

    Args:
        values: Current form values.
        lookup: Name lookup against the server; ``None`` while the server is
            unreachable.

    Returns:
        ValidationResult: Enabled actions and per-field messages.
    """
    firstname = _text(values, "firstname")
    lastname = _text(values, "lastname")
    attending = _text(values, "attending")
    messages = {
        "firstname": None if firstname else "Missing input: Firstname",
        "lastname": None if lastname else "Missing input: Lastname",
        "attending": None if attending else "Choose one of the alternatives",
    }
    if any(message is not None for message in messages.values()):
        return ValidationResult(actions=("reset",), messages=pmap(messages))

    if lookup is None:
        return ValidationResult(actions=("reset",))

    try:
        result = lookup(firstname, lastname)
    except (ClientError, httpx.HTTPError) as e:
        return ValidationResult(actions=("reset",), messages=pmap({"submit": str(e)}))

    if result.found and result.item is not None:
        if result.item.attending.casefold() == attending.casefold():
            return ValidationResult(
                actions=("reset",), messages=pmap({"submit": ALREADY_SAVED_MESSAGE})
            )
        return ValidationResult(actions=("update", "reset"))
    if result.code == "NOTFOUND":
        return ValidationResult(actions=("submit", "reset"))
    return ValidationResult(
        actions=("reset",),
        messages=pmap({"submit": result.error or "Unexpected answer from server"}),
    )


def submit_registration(
    values: Mapping[str, Any], action: str, client: AttendeeClient
) -> str:
    """Store the registration and return the thank-you message.

    Raises:
        ClientError: If the server rejects the data.
    """
    firstname = _text(values, "firstname")
    client.save(firstname, _text(values, "lastname"), _text(values, "attending"))
    verb = "updated" if action == "update" else "stored"
    return f"Thank you, {firstname}! Your data was {verb} on the server."
