"""Composition models — materialized scenes and the assembled, timed output."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from .structure import CamelModel, TemplateVideoStructure


class MaterializedScene(CamelModel):
    """A template blueprint with every placeholder bound to a prop value."""

    scene_name: str
    template_id: str
    duration_in_frames: int
    props: dict[str, Any] = Field(default_factory=dict)
    render_spec: Any = None


class ScenePlacement(CamelModel):
    scene_name: str
    template_id: str
    start_frame: int
    duration_in_frames: int


class TransitionPlacement(CamelModel):
    """A transition sitting on the cut between ``from_scene`` and ``to_scene``."""

    type: str
    from_scene: str
    to_scene: str
    at_frame: int
    duration_in_frames: int


class AudioCue(CamelModel):
    kind: Literal["background", "transition", "effect"]
    src: str
    start_frame: int
    duration_in_frames: int
    volume: float


class Composition(CamelModel):
    """The timed description handed to the rendering engine."""

    fps: int
    duration_in_frames: int
    scenes: list[ScenePlacement] = Field(default_factory=list)
    transitions: list[TransitionPlacement] = Field(default_factory=list)
    audio: list[AudioCue] = Field(default_factory=list)
    sources: list[MaterializedScene] = Field(default_factory=list)


class GenerationResult(CamelModel):
    """What a generation request reports back to its caller."""

    success: bool
    message: str
    generation_type: str = "template-based"
    duration_ms: int = 0
    structure: TemplateVideoStructure | None = None
    composition: Composition | None = None
