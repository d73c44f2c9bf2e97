"""Video structure planner — one AI planning call with a deterministic fallback.

``plan_template_video`` asks the completion service for a whole structure
grounded in the catalog. Any AI failure (missing key, transport error,
unparseable or empty output) switches to the analyzer/selector/synthesizer
pipeline instead of retrying. Both paths go through ``StructureValidator``
before returning.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from . import tracing
from .analyzer import analyze
from .catalog import TemplateCatalog, default_catalog
from .client import GeminiClient
from .config import get_config
from .errors import StructureParseError
from .knowledge import KnowledgeClient
from .models.analysis import ContentAnalysis, KnowledgeResult
from .models.structure import (
    AudioEffect,
    TemplateAudio,
    TemplateScene,
    TemplateTransition,
    TemplateVideoStructure,
)
from .prompts.director import DIRECTOR_SYSTEM, DIRECTOR_USER, SMART_GUIDANCE
from .selector import TemplateSelector
from .synthesizer import PropSynthesizer
from .validator import DEFAULT_BUDGET_FRAMES, StructureValidator

logger = logging.getLogger(__name__)

FALLBACK_TRANSITIONS = ("wipe", "fade", "slide")

FALLBACK_BACKGROUNDS = {
    "tech": "modern-electronic.mp3",
    "luxury": "corporate-upbeat.mp3",
}
DEFAULT_BACKGROUND = "motivational.mp3"

# (src, trigger_frame, volume); cues past the timeline end are never reached.
FALLBACK_EFFECTS = (
    ("impact-whoosh.mp3", 30, 0.5),
    ("transition-swoosh.mp3", 190, 0.4),
    ("transition-swoosh.mp3", 350, 0.4),
    ("final-impact.mp3", 800, 0.6),
)


def clean_json_response(text: str) -> str:
    """Strip markdown fences and any prose around the outermost JSON object."""
    text = text.replace("```json", "").replace("```", "")
    first = text.find("{")
    if first > 0:
        text = text[first:]
    last = text.rfind("}")
    if last > 0:
        text = text[: last + 1]
    return text.strip()


def parse_structure(text: str) -> TemplateVideoStructure:
    """Parse raw AI output into a candidate structure.

    Raises:
        StructureParseError: If no JSON object of the expected shape is found.
    """
    cleaned = clean_json_response(text or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise StructureParseError(f"AI response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise StructureParseError(f"Expected a JSON object, got {type(data).__name__}")
    try:
        return TemplateVideoStructure.model_validate(data)
    except ValidationError as exc:
        raise StructureParseError(f"AI response has the wrong shape: {exc}") from exc


def fallback_durations(count: int) -> list[int]:
    """200 frames for the last scene, 160/200 alternating before it."""
    return [200 if i == count - 1 else 160 + (i % 2) * 40 for i in range(count)]


class VideoStructurePlanner:
    """Plan a ``TemplateVideoStructure`` for a marketing prompt."""

    def __init__(
        self,
        catalog: TemplateCatalog | None = None,
        *,
        knowledge: KnowledgeClient | None = None,
        target_scene_count: int = 5,
        budget: int = DEFAULT_BUDGET_FRAMES,
        fps: int = 30,
        temperature: float = 0.3,
        max_tokens: int = 2000,
        knowledge_max_results: int = 2,
    ) -> None:
        self.catalog = catalog or default_catalog()
        self.selector = TemplateSelector(self.catalog)
        self.synthesizer = PropSynthesizer(self.catalog, knowledge, knowledge_max_results)
        self.validator = StructureValidator(self.catalog, budget)
        self.target_scene_count = target_scene_count
        self.budget = budget
        self.fps = fps
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_config(
        cls,
        catalog: TemplateCatalog | None = None,
        knowledge: KnowledgeClient | None = None,
    ) -> VideoStructurePlanner:
        """Build a planner from ``get_config()``; knowledge client only when configured."""
        cfg = get_config()
        if knowledge is None and cfg.knowledge_enabled:
            knowledge = KnowledgeClient.from_config()
        return cls(
            catalog,
            knowledge=knowledge,
            target_scene_count=cfg.target_scene_count,
            budget=cfg.duration_budget_frames,
            fps=cfg.fps,
            temperature=cfg.planner_temperature,
            max_tokens=cfg.planner_max_tokens,
            knowledge_max_results=cfg.knowledge_max_results,
        )

    # -- prompts ------------------------------------------------------------

    def build_system_prompt(self) -> str:
        audio = {
            "background": list(self.catalog.audio.background),
            "effects": list(self.catalog.audio.effects),
        }
        return DIRECTOR_SYSTEM.format(
            templates=json.dumps(self.catalog.summary(), indent=2),
            transitions=json.dumps(list(self.catalog.transition_types)),
            audio=json.dumps(audio, indent=2),
            budget=self.budget,
            seconds=self.budget // self.fps,
        )

    def build_user_message(self, prompt: str, analysis: ContentAnalysis) -> str:
        recommended = self.selector.select_optimal_templates(analysis, self.target_scene_count)
        guidance = SMART_GUIDANCE.format(
            industry=analysis.industry,
            tone=analysis.tone,
            visual_style=analysis.visual_style,
            complexity=analysis.complexity,
            templates=", ".join(recommended),
            flow=" → ".join(analysis.suggested_flow),
        )
        return DIRECTOR_USER.format(
            prompt=prompt, guidance=guidance, seconds=self.budget // self.fps,
        )

    # -- paths --------------------------------------------------------------

    async def build_fallback_structure(
        self,
        prompt: str,
        analysis: ContentAnalysis | None = None,
        context: KnowledgeResult | None = None,
    ) -> TemplateVideoStructure:
        """Deterministic structure from analyzer, selector and synthesizer alone."""
        analysis = analysis or analyze(prompt)
        template_ids = self.selector.select_optimal_templates(analysis, self.target_scene_count)
        logger.info("Using fallback structure with templates: %s", ", ".join(template_ids))

        if context is None:
            context = await self.synthesizer.fetch_context(prompt)

        durations = fallback_durations(len(template_ids))
        scenes = []
        for template_id, duration in zip(template_ids, durations):
            props = await self.synthesizer.generate_contextual_props(
                prompt, template_id, analysis, context=context,
            )
            scenes.append(TemplateScene(template_id=template_id, duration_in_frames=duration, props=props))

        transitions = [
            TemplateTransition(
                type=FALLBACK_TRANSITIONS[i % len(FALLBACK_TRANSITIONS)],
                duration_in_frames=15 + (i % 2) * 5,
            )
            for i in range(max(0, len(scenes) - 1))
        ]
        audio = TemplateAudio(
            background=FALLBACK_BACKGROUNDS.get(analysis.tone, DEFAULT_BACKGROUND),
            effects=[
                AudioEffect(src=src, trigger_frame=frame, volume=volume)
                for src, frame, volume in FALLBACK_EFFECTS
            ],
        )
        return TemplateVideoStructure(scenes=scenes, transitions=transitions, audio=audio)

    async def _plan_with_ai(self, prompt: str, analysis: ContentAnalysis) -> TemplateVideoStructure:
        raw = await GeminiClient.complete(
            self.build_system_prompt(),
            self.build_user_message(prompt, analysis),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        logger.debug("AI structure response: %.500s", raw)
        return parse_structure(raw)

    async def plan_template_video(self, prompt: str) -> TemplateVideoStructure:
        """Return a validated structure for *prompt*.

        AI failures never escape; they select the fallback. Only a defect in
        the fallback path itself can raise.
        """
        analysis = analyze(prompt)
        with tracing.span(
            "plan_template_video",
            attributes={"tone": analysis.tone, "industry": analysis.industry},
        ) as live:
            try:
                structure = self.validator.validate(await self._plan_with_ai(prompt, analysis))
            except StructureParseError as exc:
                logger.warning("Unparseable AI structure, using fallback: %s", exc)
                reason = "unparseable_response"
            except Exception as exc:
                logger.warning("AI structure planning failed, using fallback: %s", exc)
                reason = f"ai_error:{type(exc).__name__}"
            else:
                if structure.scenes:
                    logger.info(
                        "Planned %d scene(s), %d frames via AI",
                        len(structure.scenes), structure.total_frames,
                    )
                    tracing.annotate(
                        live, path="ai",
                        scene_count=len(structure.scenes), total_frames=structure.total_frames,
                    )
                    return structure
                logger.warning("AI structure had no usable scenes, using fallback")
                reason = "no_usable_scenes"

            structure = self.validator.validate(await self.build_fallback_structure(prompt, analysis))
            tracing.annotate(
                live, path="fallback", fallback_reason=reason,
                scene_count=len(structure.scenes), total_frames=structure.total_frames,
            )
            return structure
