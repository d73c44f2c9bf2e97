"""Template selector — pick an ordered, duplicate-free list of template ids."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .catalog import SceneTemplate, TemplateCatalog, default_catalog
from .models.analysis import ContentAnalysis

logger = logging.getLogger(__name__)


def score_template(template: SceneTemplate, analysis: ContentAnalysis) -> int:
    """Score *template* against *analysis*.

    +3 exact visual style, +2 exact complexity (else +1 for a complex
    template), +1 per keyword found in the template's name and description.
    """
    score = 0
    if template.visual_style == analysis.visual_style:
        score += 3
    if template.complexity == analysis.complexity:
        score += 2
    elif template.complexity == "complex":
        score += 1

    haystack = f"{template.name} {template.description}".lower()
    score += sum(1 for keyword in analysis.keywords if keyword in haystack)
    return score


class TemplateSelector:
    """Choose templates that follow an analysis' suggested category flow."""

    def __init__(self, catalog: TemplateCatalog | None = None) -> None:
        self.catalog = catalog or default_catalog()

    def best_template(
        self, candidates: Iterable[SceneTemplate], analysis: ContentAnalysis
    ) -> SceneTemplate | None:
        """Highest-scoring candidate; ties go to the earlier catalog entry."""
        ranked = sorted(candidates, key=lambda t: score_template(t, analysis), reverse=True)
        return ranked[0] if ranked else None

    def _flow_candidates(self, category: str, analysis: ContentAnalysis) -> list[SceneTemplate]:
        in_category = self.catalog.by_category(category)
        by_style = [t for t in in_category if t.visual_style == analysis.visual_style]
        if by_style:
            return by_style
        by_complexity = [t for t in in_category if t.complexity == analysis.complexity]
        return by_complexity or in_category

    def select_optimal_templates(self, analysis: ContentAnalysis, target_count: int = 5) -> list[str]:
        """Return at most *target_count* distinct catalog ids in flow order.

        One template per suggested category first, then the best remaining
        templates from the whole catalog until the target is met.
        """
        if target_count <= 0:
            return []

        selected: list[str] = []
        for category in analysis.suggested_flow:
            if len(selected) >= target_count:
                break
            candidates = [
                t for t in self._flow_candidates(category, analysis) if t.id not in selected
            ]
            template = self.best_template(candidates, analysis)
            if template is not None:
                selected.append(template.id)

        while len(selected) < target_count:
            remaining = [t for t in self.catalog.templates if t.id not in selected]
            template = self.best_template(remaining, analysis)
            if template is None:
                break
            selected.append(template.id)

        logger.info("Selected templates: %s", ", ".join(selected))
        return selected
