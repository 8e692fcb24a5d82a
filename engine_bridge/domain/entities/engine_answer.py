"""
EngineAnswer Entities - Result of one upstream engine call.

Exactly one variant is produced per request and consumed once by the
response templater.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TextAnswer:
    messages: tuple[str, ...]


@dataclass(frozen=True)
class ImageAnswer:
    image_url: str
    caption: str | None = None  # companion description from the engine


@dataclass(frozen=True)
class LogicalFailure:
    """Engine responded but reported success=false or nothing usable."""

    message: str | None = None
    error: str | None = None

    @property
    def detail(self) -> str | None:
        return self.message or self.error


@dataclass(frozen=True)
class TransportFailure:
    """The engine call itself did not complete."""

    reason: str
    status_code: int | None = None


EngineAnswer = Union[TextAnswer, ImageAnswer, LogicalFailure, TransportFailure]
