"""Structure validator — repair a candidate structure against the catalogs."""

from __future__ import annotations

import logging

from .catalog import TemplateCatalog, default_catalog
from .models.structure import TemplateVideoStructure

logger = logging.getLogger(__name__)

DEFAULT_BUDGET_FRAMES = 900


class StructureValidator:
    """Project a structure onto what the catalogs and duration budget allow.

    ``validate`` mutates and returns the same object. It never fails, and a
    second pass over its output changes nothing.
    """

    def __init__(self, catalog: TemplateCatalog | None = None, budget: int = DEFAULT_BUDGET_FRAMES) -> None:
        self.catalog = catalog or default_catalog()
        self.budget = budget

    def validate(self, structure: TemplateVideoStructure) -> TemplateVideoStructure:
        catalog = self.catalog

        kept = [s for s in structure.scenes if catalog.has(s.template_id)]
        if len(kept) != len(structure.scenes):
            dropped = [s.template_id for s in structure.scenes if not catalog.has(s.template_id)]
            logger.info("Dropped scenes with unknown templates: %s", ", ".join(dropped))
        structure.scenes = kept

        transitions = [t for t in structure.transitions if catalog.has_transition(t.type)]
        if len(transitions) != len(structure.transitions):
            logger.info("Dropped %d unknown transition(s)", len(structure.transitions) - len(transitions))
        # Never more transitions than cuts between scenes.
        structure.transitions = transitions[:max(0, len(kept) - 1)]

        audio = structure.audio
        if not catalog.has_background(audio.background):
            logger.info("Replaced unknown background track %r", audio.background)
            audio.background = catalog.audio.background[0]
        audio.effects = [e for e in audio.effects if catalog.has_effect(e.src)]

        # Hard cumulative cap: the crossing scene is cut, later scenes go to 0.
        current = 0
        for scene in structure.scenes:
            if current + scene.duration_in_frames > self.budget:
                truncated = max(0, self.budget - current)
                logger.info(
                    "Truncated %s from %d to %d frames",
                    scene.template_id, scene.duration_in_frames, truncated,
                )
                scene.duration_in_frames = truncated
            current += scene.duration_in_frames

        return structure
