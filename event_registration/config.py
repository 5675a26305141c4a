"""Runtime settings.

Settings are a frozen dataclass with defaults that suit local development.
:meth:`Settings.from_env` overrides them from ``EVENT_REGISTRATION_*``
environment variables; the server and the Streamlit app both read it once at
startup.
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

ENV_PREFIX = "EVENT_REGISTRATION_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Server and front-end configuration.

    Attributes:
        host: Interface the REST server binds to.
        port: Port of the REST server.
        api_url: Base URL the front end uses to reach the REST server.
        store_id: Name of the attendee store the routes use.
        logo_text: Text drawn by the front-end logo.
        animation: Animation setup string for the logo, empty to disable.
        animation_delay: Seconds between animation steps.
        log_level: Name of the root log level.
    """

    host: str = "127.0.0.1"
    port: int = 3011
    api_url: str = "http://127.0.0.1:3011"
    store_id: str = "default"
    logo_text: str = "CTS\n2020"
    animation: str = "running-point:red"
    animation_delay: float = 0.15
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``EVENT_REGISTRATION_<FIELD>`` variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for field in fields(cls):
            raw = environ.get(ENV_PREFIX + field.name.upper())
            if raw is None:
                continue
            if field.type in (int, "int"):
                values[field.name] = int(raw)
            elif field.type in (float, "float"):
                values[field.name] = float(raw)
            else:
                values[field.name] = raw.replace("\\n", "\n")
        return cls(**values)


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once with the package log format."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
