"""In-memory attendee store.

Records are frozen :class:`Attendee` values kept in a persistent vector; a
save replaces the vector instead of mutating records in place. Names are
matched case-insensitively. Nothing is persisted: a fresh store starts with
two example records.

Stores are named singletons obtained through :func:`get_instance` so the HTTP
routes and tests share state per ``store_id``.
"""

import logging
from dataclasses import asdict, dataclass, replace
from enum import StrEnum
from typing import Any, Dict, Optional, Tuple

from pyrsistent import PVector, pvector

logger = logging.getLogger(__name__)


class ConflictMode(StrEnum):
    """What :meth:`AttendeeStore.save_item` does when the name exists."""

    ERROR = "error"
    OVERWRITE = "overwrite"
    SKIP = "skip"


class DuplicateAttendeeError(Exception):
    """Raised by ``ConflictMode.ERROR`` saves of an already registered name."""


@dataclass(frozen=True)
class Attendee:
    id: int
    firstname: str
    lastname: str
    attending: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def matches(self, firstname: str, lastname: str) -> bool:
        return (
            self.firstname.casefold() == firstname.casefold()
            and self.lastname.casefold() == lastname.casefold()
        )


EXAMPLE_ATTENDEES: Tuple[Attendee, ...] = (
    Attendee(id=1, firstname="Alexander", lastname="Urban", attending="yes"),
    Attendee(id=2, firstname="Johnny", lastname="Puma", attending="no"),
)


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str) or value.strip() == "":
        raise ValueError(f"Invalid {name}: {value!r}")
    return value


class AttendeeStore:
    """Find/save-by-name store for event attendees."""

    def __init__(self, records: Optional[Tuple[Attendee, ...]] = None) -> None:
        self._records: PVector[Attendee] = pvector(
            EXAMPLE_ATTENDEES if records is None else records
        )

    def get_item(self, firstname: str, lastname: str) -> Optional[Attendee]:
        """Return the attendee with the given name, ignoring case.

        Raises:
            ValueError: If either name is empty or not a string.
        """
        _require_text("firstname", firstname)
        _require_text("lastname", lastname)
        for record in self._records:
            if record.matches(firstname, lastname):
                return record
        return None

    def save_item(
        self,
        firstname: str,
        lastname: str,
        attending: str,
        handle_conflicts: ConflictMode | str = ConflictMode.ERROR,
    ) -> Attendee:
        """Store a new attendee or resolve a name conflict.

        Args:
            firstname: First name of the attendee.
            lastname: Last name of the attendee.
            attending: Answer such as ``"yes"``, ``"no"`` or ``"maybe"``.
            handle_conflicts: ``error`` raises, ``overwrite`` replaces the
                stored answer, ``skip`` keeps the stored record.

        Returns:
            Attendee: The record as stored after the call.

        Raises:
            ValueError: On empty fields or an unknown conflict mode.
            DuplicateAttendeeError: On a conflict in ``error`` mode.
        """
        _require_text("firstname", firstname)
        _require_text("lastname", lastname)
        _require_text("attending", attending)
        mode = ConflictMode(handle_conflicts)

        existing = self.get_item(firstname, lastname)
        if existing is None:
            new_id = max((record.id for record in self._records), default=0) + 1
            record = Attendee(
                id=new_id, firstname=firstname, lastname=lastname, attending=attending
            )
            self._records = self._records.append(record)
            logger.info("Registered attendee %s (%s)", new_id, attending)
            return record

        if mode == ConflictMode.ERROR:
            raise DuplicateAttendeeError(
                "Can't save record - name is already registered."
            )
        if mode == ConflictMode.SKIP:
            return existing

        index = self._records.index(existing)
        updated = replace(existing, attending=attending)
        self._records = self._records.set(index, updated)
        logger.info("Updated attendee %s (%s)", updated.id, attending)
        return updated

    def list_items(self) -> Tuple[Attendee, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)


_STORES: Dict[str, AttendeeStore] = {}


def get_instance(store_id: str = "default") -> AttendeeStore:
    """Return the store registered under ``store_id``, creating it on demand."""
    if store_id not in _STORES:
        _STORES[store_id] = AttendeeStore()
    return _STORES[store_id]


def reset_instances() -> None:
    """Forget all named stores (tests start from the example records)."""
    _STORES.clear()
