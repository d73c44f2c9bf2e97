"""Video structure models — the planner's candidate and validated output.

A ``TemplateVideoStructure`` is built fresh per request, either parsed from
the completion service's JSON or constructed by the deterministic fallback,
then repaired in place by ``StructureValidator``. Field names are snake_case
in Python and camelCase on the wire (``templateId``, ``durationInFrames``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising to camelCase JSON and accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        """Dump with camelCase keys, JSON-safe values."""
        return self.model_dump(mode="json", by_alias=True)


class TemplateScene(CamelModel):
    """One candidate scene: which template, how long, and with which props."""

    template_id: str
    duration_in_frames: int = Field(ge=0)
    props: dict[str, Any] = Field(default_factory=dict)


class TemplateTransition(CamelModel):
    """A timed blend between two adjacent scenes.

    ``type`` is deliberately a plain string here; unknown types are dropped
    by the validator rather than failing the whole parse.
    """

    type: str
    duration_in_frames: int = Field(ge=1)


class AudioEffect(CamelModel):
    """A sound effect cue at an absolute frame of the final timeline."""

    src: str
    trigger_frame: int = 0
    volume: float = 0.5

    @field_validator("trigger_frame")
    @classmethod
    def clamp_trigger_frame(cls, value: int) -> int:
        return max(0, value)

    @field_validator("volume")
    @classmethod
    def clamp_volume(cls, value: float) -> float:
        return min(1.0, max(0.0, value))


class TemplateAudio(CamelModel):
    """Background track plus effect cues, all keys into the audio catalog."""

    background: str = ""
    effects: list[AudioEffect] = Field(default_factory=list)


class TemplateVideoStructure(CamelModel):
    """Scenes, transitions and audio for one generated video."""

    scenes: list[TemplateScene] = Field(default_factory=list)
    transitions: list[TemplateTransition] = Field(default_factory=list)
    audio: TemplateAudio = Field(default_factory=TemplateAudio)

    @property
    def total_frames(self) -> int:
        return sum(scene.duration_in_frames for scene in self.scenes)
