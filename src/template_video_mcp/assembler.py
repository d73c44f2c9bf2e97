"""Composition assembler — absolute timing for scenes, transitions and audio."""

from __future__ import annotations

import logging

from .catalog import TemplateCatalog, default_catalog
from .models.composition import (
    AudioCue,
    Composition,
    MaterializedScene,
    ScenePlacement,
    TransitionPlacement,
)
from .models.structure import TemplateVideoStructure

logger = logging.getLogger(__name__)

BACKGROUND_VOLUME = 0.15
TRANSITION_EFFECT_VOLUME = 0.4
TRANSITION_EFFECT_LEAD = 30


class CompositionAssembler:
    """Lay materialized scenes back to back and derive the cue sheet.

    Scene offsets are a running sum of durations; transitions blend across
    the cut and do not shift later scenes.
    """

    def __init__(self, catalog: TemplateCatalog | None = None, fps: int = 30) -> None:
        self.catalog = catalog or default_catalog()
        self.fps = fps

    def assemble(
        self,
        structure: TemplateVideoStructure,
        materialized: list[MaterializedScene],
    ) -> Composition:
        if len(materialized) != len(structure.scenes):
            raise ValueError(
                f"Expected {len(structure.scenes)} materialized scene(s), got {len(materialized)}"
            )

        placements: list[ScenePlacement] = []
        offset = 0
        for source in materialized:
            placements.append(ScenePlacement(
                scene_name=source.scene_name,
                template_id=source.template_id,
                start_frame=offset,
                duration_in_frames=source.duration_in_frames,
            ))
            offset += source.duration_in_frames
        total = offset

        audio: list[AudioCue] = []
        if structure.audio.background and total > 0:
            audio.append(AudioCue(
                kind="background",
                src=structure.audio.background,
                start_frame=0,
                duration_in_frames=total,
                volume=BACKGROUND_VOLUME,
            ))

        transitions: list[TransitionPlacement] = []
        for index, (before, after) in enumerate(zip(placements, placements[1:])):
            if index >= len(structure.transitions):
                break
            transition = structure.transitions[index]
            boundary = after.start_frame
            transitions.append(TransitionPlacement(
                type=transition.type,
                from_scene=before.scene_name,
                to_scene=after.scene_name,
                at_frame=boundary,
                duration_in_frames=transition.duration_in_frames,
            ))
            if self.catalog.has_transition(transition.type):
                audio.append(AudioCue(
                    kind="transition",
                    src=self.catalog.transition(transition.type).sound_effect,
                    start_frame=max(0, boundary - TRANSITION_EFFECT_LEAD),
                    duration_in_frames=transition.duration_in_frames + TRANSITION_EFFECT_LEAD,
                    volume=TRANSITION_EFFECT_VOLUME,
                ))

        for effect in structure.audio.effects:
            if effect.trigger_frame < total:
                audio.append(AudioCue(
                    kind="effect",
                    src=effect.src,
                    start_frame=effect.trigger_frame,
                    duration_in_frames=total - effect.trigger_frame,
                    volume=effect.volume,
                ))

        logger.info(
            "Assembled %d scene(s), %d transition(s), %d audio cue(s) over %d frames",
            len(placements), len(transitions), len(audio), total,
        )
        return Composition(
            fps=self.fps,
            duration_in_frames=total,
            scenes=placements,
            transitions=transitions,
            audio=audio,
            sources=list(materialized),
        )
