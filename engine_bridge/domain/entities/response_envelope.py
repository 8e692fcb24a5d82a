"""
ResponseEnvelope Entities - Platform output built from an engine answer.

Skill envelopes serialize to the fixed template format::

    {"version": "2.0", "template": {"outputs": [{"simpleText": {...}}, ...]}}
"""

from dataclasses import dataclass
from typing import Union

SKILL_VERSION = "2.0"


@dataclass(frozen=True)
class TextOutput:
    text: str

    def to_dict(self) -> dict:
        return {"simpleText": {"text": self.text}}


@dataclass(frozen=True)
class ImageOutput:
    image_url: str
    alt_text: str

    def to_dict(self) -> dict:
        return {"simpleImage": {"imageUrl": self.image_url, "altText": self.alt_text}}


@dataclass(frozen=True)
class SkillEnvelope:
    outputs: tuple[Union[TextOutput, ImageOutput], ...]
    version: str = SKILL_VERSION

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "template": {"outputs": [output.to_dict() for output in self.outputs]},
        }

    @property
    def text(self) -> str | None:
        """Text of the first text block, if any."""
        for output in self.outputs:
            if isinstance(output, TextOutput):
                return output.text
        return None


@dataclass(frozen=True)
class MentionReply:
    """Plain text reply for the mention bot, pre-split into sendable chunks."""

    chunks: tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n".join(self.chunks)


ResponseEnvelope = Union[SkillEnvelope, MentionReply]
