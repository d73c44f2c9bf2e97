"""Tests for template scoring and selection."""

from __future__ import annotations

import pytest

from template_video_mcp.analyzer import analyze
from template_video_mcp.catalog import (
    AudioLibrary,
    SceneTemplate,
    TemplateCatalog,
    TransitionSpec,
    default_catalog,
)
from template_video_mcp.models.analysis import ContentAnalysis
from template_video_mcp.selector import TemplateSelector, score_template


def _template(template_id: str, **overrides) -> SceneTemplate:
    fields = {
        "id": template_id,
        "name": template_id,
        "description": "",
        "category": "hero",
        "complexity": "medium",
        "visual_style": "modern",
    }
    fields.update(overrides)
    return SceneTemplate(**fields)


def _catalog(*templates: SceneTemplate) -> TemplateCatalog:
    return TemplateCatalog(
        templates,
        (TransitionSpec(name="fade", sound_effect="pop.mp3"),),
        AudioLibrary(background=("bg.mp3",), effects=("pop.mp3",)),
    )


class TestScoreTemplate:
    def test_style_complexity_and_keywords(self):
        analysis = ContentAnalysis(visual_style="futuristic", complexity="complex", keywords=["neon", "pulse"])
        template = default_catalog().get("cta-neon-pulse")
        # +3 style, +2 complexity, +2 keywords
        assert score_template(template, analysis) == 7

    def test_complex_bonus_when_complexity_differs(self):
        analysis = ContentAnalysis(visual_style="retro", complexity="medium", keywords=[])
        assert score_template(_template("a", complexity="complex"), analysis) == 1
        assert score_template(_template("b", complexity="simple"), analysis) == 0


class TestSelectOptimalTemplates:
    def test_tech_prompt_follows_flow(self):
        analysis = analyze("Tech startup product launch with futuristic design")
        selected = TemplateSelector().select_optimal_templates(analysis, 5)
        assert selected == [
            "hero-kinetic-text",
            "product-showcase-3d",
            "features-holographic-cards",
            "stats-circular-progress",
            "cta-neon-pulse",
        ]

    @pytest.mark.parametrize("target", [1, 3, 5, 8, 17, 25])
    @pytest.mark.parametrize(
        "prompt",
        ["", "Luxury watch brand", "Fun mobile game", "Simple eco soap", "Enterprise software"],
    )
    def test_result_is_bounded_valid_and_unique(self, prompt, target):
        catalog = default_catalog()
        selected = TemplateSelector(catalog).select_optimal_templates(analyze(prompt), target)
        assert len(selected) == min(target, len(catalog.ids()))
        assert len(set(selected)) == len(selected)
        assert all(catalog.has(tid) for tid in selected)

    def test_non_positive_target(self):
        assert TemplateSelector().select_optimal_templates(analyze("x"), 0) == []

    def test_flow_stops_at_target(self):
        analysis = analyze("Tech startup")
        assert TemplateSelector().select_optimal_templates(analysis, 2) == [
            "hero-kinetic-text",
            "product-showcase-3d",
        ]

    def test_ties_broken_by_catalog_order(self):
        catalog = _catalog(_template("first"), _template("second"))
        analysis = ContentAnalysis(suggested_flow=["hero"])
        assert TemplateSelector(catalog).select_optimal_templates(analysis, 1) == ["first"]

    def test_flow_category_reused_without_duplicates(self):
        """GIVEN a flow naming one category twice THEN a different template fills the second slot."""
        catalog = _catalog(_template("first"), _template("second"))
        analysis = ContentAnalysis(suggested_flow=["hero", "hero"])
        assert TemplateSelector(catalog).select_optimal_templates(analysis, 2) == ["first", "second"]

    def test_missing_category_filled_from_catalog(self):
        catalog = _catalog(_template("only-hero"), _template("a-cta", category="cta"))
        analysis = ContentAnalysis(suggested_flow=["stats"])
        selected = TemplateSelector(catalog).select_optimal_templates(analysis, 5)
        assert selected == ["only-hero", "a-cta"]

    def test_style_filter_beats_higher_complexity_score(self):
        catalog = _catalog(
            _template("medium-modern", complexity="medium", visual_style="modern"),
            _template("complex-retro", complexity="complex", visual_style="retro"),
        )
        analysis = ContentAnalysis(visual_style="retro", complexity="medium", suggested_flow=["hero"])
        assert TemplateSelector(catalog).select_optimal_templates(analysis, 1) == ["complex-retro"]
