import httpx
import pytest

from event_registration.attendees import Attendee
from event_registration.client import ClientError, LookupResult
from event_registration.form import (
    ALREADY_SAVED_MESSAGE,
    DEFAULT_SUBMIT,
    REGISTRATION_FIELDS,
    FieldSpec,
    ValidationResult,
    after_submit,
    apply_validation,
    change_value,
    final_buttons,
    initial_state,
    input_fields,
    is_enabled,
    reset_form,
    submit_registration,
    validate_registration,
    visible_message,
)

FILLED = {"firstname": " Johnny ", "lastname": "Puma", "attending": "yes"}


def fixed_lookup(result: LookupResult):
    return lambda firstname, lastname: result


def test_field_spec_validation() -> None:
    with pytest.raises(ValueError):
        FieldSpec(name="")
    with pytest.raises(ValueError):
        FieldSpec(name="x", type="slider")
    with pytest.raises(ValueError):
        FieldSpec(name="x", type="radio")
    with pytest.raises(ValueError):
        FieldSpec(name="x", type="radio", options=(("yes", ""),))


def test_field_id() -> None:
    assert FieldSpec(name="firstname").field_id("register") == "register-firstname"
    assert FieldSpec(name="firstname").field_id() == "form-firstname"


def test_initial_state_holds_input_fields_only() -> None:
    state = initial_state(REGISTRATION_FIELDS)
    assert dict(state.values) == {"firstname": "", "lastname": "", "attending": ""}
    assert [f.name for f in input_fields(REGISTRATION_FIELDS)] == ["firstname", "lastname", "attending"]
    assert state.alert is None


def test_change_value_marks_field_touched() -> None:
    state = initial_state(REGISTRATION_FIELDS)
    state = apply_validation(state, validate_registration(state.values, None))
    assert visible_message(state, "firstname") is None

    changed = change_value(state, "lastname", "Puma")
    assert changed.values["lastname"] == "Puma"
    assert "lastname" in changed.touched
    assert state.values["lastname"] == ""

    with pytest.raises(KeyError):
        change_value(state, "email", "a@b.c")


def test_visible_message_after_touch() -> None:
    state = change_value(initial_state(REGISTRATION_FIELDS), "firstname", "")
    state = apply_validation(state, validate_registration(state.values, None))
    assert visible_message(state, "firstname") == "Missing input: Firstname"
    assert visible_message(state, "lastname") is None


def test_missing_inputs() -> None:
    result = validate_registration({"firstname": "  ", "lastname": "", "attending": None}, None)
    assert result.actions == ("reset",)
    assert result.messages["firstname"] == "Missing input: Firstname"
    assert result.messages["lastname"] == "Missing input: Lastname"
    assert result.messages["attending"] == "Choose one of the alternatives"


def test_server_unavailable() -> None:
    result = validate_registration(FILLED, None)
    assert result.actions == ("reset",)
    assert not any(result.messages.values())


def test_unknown_name_enables_submit() -> None:
    result = validate_registration(
        FILLED, fixed_lookup(LookupResult(found=False, code="NOTFOUND", error="none"))
    )
    assert result.actions == ("submit", "reset")


def test_same_answer_was_already_saved() -> None:
    stored = Attendee(2, "Johnny", "Puma", "YES")
    result = validate_registration(FILLED, fixed_lookup(LookupResult(found=True, item=stored)))
    assert result.actions == ("reset",)
    assert result.messages["submit"] == ALREADY_SAVED_MESSAGE


def test_changed_answer_enables_update() -> None:
    stored = Attendee(2, "Johnny", "Puma", "no")
    result = validate_registration(FILLED, fixed_lookup(LookupResult(found=True, item=stored)))
    assert result.actions == ("update", "reset")


def test_lookup_receives_stripped_names() -> None:
    seen = []

    def lookup(firstname: str, lastname: str) -> LookupResult:
        seen.append((firstname, lastname))
        return LookupResult(found=False, code="NOTFOUND")

    validate_registration(FILLED, lookup)
    assert seen == [("Johnny", "Puma")]


@pytest.mark.parametrize("error", [ClientError("boom"), httpx.ConnectError("boom")])
def test_lookup_failure_shows_error(error: Exception) -> None:
    def lookup(firstname: str, lastname: str) -> LookupResult:
        raise error

    result = validate_registration(FILLED, lookup)
    assert result.actions == ("reset",)
    assert result.messages["submit"] == "boom"


def test_unexpected_lookup_code() -> None:
    result = validate_registration(
        FILLED, fixed_lookup(LookupResult(found=False, code="DBERROR", error="db down"))
    )
    assert result.actions == ("reset",)
    assert result.messages["submit"] == "db down"


def test_final_buttons_pick_enabled_submit() -> None:
    state = apply_validation(
        initial_state(REGISTRATION_FIELDS), ValidationResult(actions=("update", "reset"))
    )
    buttons = final_buttons(REGISTRATION_FIELDS, state)
    assert buttons["submit"].name == "update"
    assert buttons["reset"].name == "reset"
    assert is_enabled(state, buttons["submit"])


def test_final_buttons_fall_back_to_first_submit() -> None:
    state = apply_validation(initial_state(REGISTRATION_FIELDS), ValidationResult(actions=("reset",)))
    buttons = final_buttons(REGISTRATION_FIELDS, state)
    assert buttons["submit"].name == "submit"
    assert not is_enabled(state, buttons["submit"])


def test_form_without_submit_gets_default() -> None:
    fields = (FieldSpec(name="comment", type="textarea"),)
    buttons = final_buttons(fields, initial_state(fields))
    assert buttons == {"submit": DEFAULT_SUBMIT}


def test_reset_and_after_submit() -> None:
    state = change_value(initial_state(REGISTRATION_FIELDS), "firstname", "Ada")
    assert reset_form(REGISTRATION_FIELDS) == initial_state(REGISTRATION_FIELDS)

    done = after_submit(REGISTRATION_FIELDS, "Thanks")
    assert done.alert == "Thanks"
    assert done.values == initial_state(REGISTRATION_FIELDS).values
    assert after_submit(REGISTRATION_FIELDS, "").alert is None
    assert state.values["firstname"] == "Ada"


class RecordingClient:
    def __init__(self) -> None:
        self.saved = []

    def save(self, firstname: str, lastname: str, attending: str) -> None:
        self.saved.append((firstname, lastname, attending))


@pytest.mark.parametrize("action, verb", [("submit", "stored"), ("update", "updated")])
def test_submit_registration(action: str, verb: str) -> None:
    client = RecordingClient()
    message = submit_registration(FILLED, action, client)  # type: ignore[arg-type]
    assert client.saved == [("Johnny", "Puma", "yes")]
    assert message == f"Thank you, Johnny! Your data was {verb} on the server."
