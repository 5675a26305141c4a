"""REST backend for attendee registration.

Routes:

* ``GET /health`` - liveness probe.
* ``GET /attendee`` - all records as ``{"count", "items"}``.
* ``GET /attendee/{firstname}/{lastname}`` - lookup; a miss is still a 200
  with ``{"success": false, "code": "NOTFOUND"}`` so the form can tell
  "unknown name" from a server error.
* ``PUT /attendee`` - create or overwrite the answer of an attendee.

Error bodies are ``{"error": message}``: 400 for invalid input, 500 for
unexpected store failures.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from event_registration import attendees
from event_registration.attendees import AttendeeStore, ConflictMode
from event_registration.config import Settings, configure_logging

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "There is no record with the given content."


class AttendeeIn(BaseModel):
    firstname: str
    lastname: str
    attending: str


class AttendeeOut(BaseModel):
    id: int
    firstname: str
    lastname: str
    attending: str


class AttendeeList(BaseModel):
    count: int
    items: list[AttendeeOut]


def create_app(store: Optional[AttendeeStore] = None, store_id: str = "default") -> FastAPI:
    """Build the FastAPI application.

    Args:
        store: Store to serve; defaults to the named singleton ``store_id``.
        store_id: Name passed to :func:`attendees.get_instance`.
    """
    app = FastAPI(title="Event registration")

    def get_store() -> AttendeeStore:
        return store if store is not None else attendees.get_instance(store_id)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc.errors())})

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/attendee", response_model=AttendeeList)
    def list_attendees() -> Any:
        records = get_store().list_items()
        return {"count": len(records), "items": [r.to_dict() for r in records]}

    @app.get("/attendee/{firstname}/{lastname}")
    def get_attendee(firstname: str, lastname: str) -> Any:
        try:
            record = get_store().get_item(firstname, lastname)
        except ValueError as e:
            return JSONResponse(status_code=400, content={"error": str(e)})
        if record is None:
            return {"success": False, "code": "NOTFOUND", "error": NOT_FOUND_MESSAGE}
        return {"success": True, "item": record.to_dict()}

    @app.put("/attendee", response_model=AttendeeOut)
    def put_attendee(body: AttendeeIn) -> Any:
        try:
            record = get_store().save_item(
                body.firstname.strip(),
                body.lastname.strip(),
                body.attending,
                ConflictMode.OVERWRITE,
            )
        except ValueError as e:
            logger.warning("Rejected attendee update: %s", e)
            return JSONResponse(status_code=400, content={"error": str(e)})
        return record.to_dict()

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    return app


def main() -> None:
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("Server is listening on http://%s:%s", settings.host, settings.port)
    uvicorn.run(
        create_app(store_id=settings.store_id), host=settings.host, port=settings.port
    )


if __name__ == "__main__":
    main()
