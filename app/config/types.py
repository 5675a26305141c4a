from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LogoConfig:
    text: str
    color: str
    background: str
    zoom: int
    ratio: Optional[float]
    animation: Optional[str]
