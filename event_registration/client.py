"""HTTP client for the attendee REST backend.

Wraps an ``httpx.Client`` so callers (the registration form, tests) get
typed results instead of raw JSON. Pass any ``httpx.Client`` whose
``base_url`` points at the server; FastAPI's ``TestClient`` works too.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from event_registration.attendees import Attendee

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class ClientError(Exception):
    """The server answered with an error or an unexpected body."""


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a by-name lookup.

    Attributes:
        found: True if the server knows the name.
        item: The stored record when found.
        code: Server-side code for misses, e.g. ``"NOTFOUND"``.
        error: Human readable message for misses.
    """

    found: bool
    item: Optional[Attendee] = None
    code: Optional[str] = None
    error: Optional[str] = None


def _attendee(data: Dict[str, Any]) -> Attendee:
    return Attendee(
        id=int(data["id"]),
        firstname=data["firstname"],
        lastname=data["lastname"],
        attending=data["attending"],
    )


class AttendeeClient:
    http: httpx.Client

    def __init__(self, http: httpx.Client):
        self.http = http

    @classmethod
    def connect(cls, base_url: str, timeout: float = DEFAULT_TIMEOUT) -> "AttendeeClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def _json(self, response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError as e:
            raise ClientError(f"Invalid response body ({response.status_code})") from e
        if response.status_code != 200:
            message = body.get("error") if isinstance(body, dict) else None
            raise ClientError(message or f"Request failed ({response.status_code})")
        return body

    def health(self) -> bool:
        """Return True if the server answers its health probe."""
        try:
            response = self.http.get("/health")
        except httpx.HTTPError as e:
            logger.warning("Health check failed: %s", e)
            return False
        return response.status_code == 200

    def list(self) -> List[Attendee]:
        body = self._json(self.http.get("/attendee"))
        return [_attendee(item) for item in body["items"]]

    def lookup(self, firstname: str, lastname: str) -> LookupResult:
        path = f"/attendee/{quote(firstname.strip(), safe='')}/{quote(lastname.strip(), safe='')}"
        body = self._json(self.http.get(path))
        if body.get("success"):
            return LookupResult(found=True, item=_attendee(body["item"]))
        return LookupResult(found=False, code=body.get("code"), error=body.get("error"))

    def save(self, firstname: str, lastname: str, attending: str) -> Attendee:
        body = self._json(
            self.http.put(
                "/attendee",
                json={"firstname": firstname, "lastname": lastname, "attending": attending},
            )
        )
        return _attendee(body)
