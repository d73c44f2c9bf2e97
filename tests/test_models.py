"""Tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from template_video_mcp.models.analysis import KnowledgeResult
from template_video_mcp.models.props import (
    CtaProps,
    FeatureListProps,
    HeroProps,
    StatListProps,
    coerce_stats,
)
from template_video_mcp.models.structure import TemplateScene, TemplateVideoStructure


class TestStructureModels:
    def test_accepts_camel_and_snake_case(self):
        a = TemplateScene(templateId="logo-reveal", durationInFrames=90)
        b = TemplateScene(template_id="logo-reveal", duration_in_frames=90)
        assert a == b

    def test_camel_case_dump(self):
        s = TemplateVideoStructure(scenes=[TemplateScene(template_id="x", duration_in_frames=10)])
        d = s.to_json_dict()
        assert d["scenes"][0] == {"templateId": "x", "durationInFrames": 10, "props": {}}
        assert d["audio"] == {"background": "", "effects": []}

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            TemplateScene(template_id="x", duration_in_frames=-1)

    def test_total_frames(self):
        s = TemplateVideoStructure(scenes=[
            TemplateScene(template_id="a", duration_in_frames=100),
            TemplateScene(template_id="b", duration_in_frames=50),
        ])
        assert s.total_frames == 150


class TestPropsModels:
    def test_hero_requires_title(self):
        with pytest.raises(ValidationError):
            HeroProps(subtitle="only subtitle")

    def test_cta_from_camel_case(self):
        p = CtaProps.model_validate({"mainText": "Go", "buttonText": "Now"})
        assert p.main_text == "Go"

    def test_features_from_names(self):
        p = FeatureListProps.model_validate({"features": ["Speed"]})
        assert p.features[0].title == "Speed"
        assert p.features[0].emoji == "🚀"

    def test_empty_feature_list_rejected(self):
        with pytest.raises(ValidationError):
            FeatureListProps.model_validate({"features": []})

    def test_stats_suffix_by_magnitude(self):
        p = StatListProps.model_validate({"stats": [
            {"label": "Users", "value": 101},
            {"label": "Score", "value": 100},
            {"label": "Growth", "value": 5, "suffix": "x"},
        ]})
        assert [s.suffix for s in p.stats] == ["+", "%", "x"]

    def test_coerce_stats_does_not_mutate_input(self):
        raw = [{"label": "Users", "value": 10}]
        coerce_stats(raw)
        assert raw == [{"label": "Users", "value": 10}]

    def test_non_list_passes_through(self):
        with pytest.raises(ValidationError):
            StatListProps.model_validate({"stats": "lots"})


class TestKnowledgeResult:
    def test_degraded_constructor(self):
        r = KnowledgeResult.degraded("empty search term")
        assert r.status == "degraded"
        assert r.output is None
        assert r.reason == "empty search term"
