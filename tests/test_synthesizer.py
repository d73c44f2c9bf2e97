"""Tests for prop synthesis from prompts and knowledge context."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from template_video_mcp.analyzer import analyze
from template_video_mcp.catalog import default_catalog
from template_video_mcp.knowledge import KnowledgeClient
from template_video_mcp.models.analysis import ContentAnalysis, KnowledgeResult
from template_video_mcp.synthesizer import (
    PropSynthesizer,
    contextual_line,
    extract_brand_name,
    extract_product_name,
    generate_button_text,
    generate_features,
    generate_main_text,
    generate_stats,
    generate_subtitle,
    generate_title,
)
from tests.conftest import make_knowledge_transport

TECH = ContentAnalysis(industry="technology", tone="tech", visual_style="futuristic")
LUXURY = ContentAnalysis(industry="luxury", tone="luxury")
PLAIN = ContentAnalysis()


class TestContextualLine:
    def test_value_after_first_colon(self):
        context = "Overview\nProduct name: Acme Cloud\nTagline: Fly higher"
        assert contextual_line(context, ("name",), 40) == "Acme Cloud"

    def test_first_matching_line_only(self):
        """GIVEN the first matching line is too long THEN later lines are not consulted."""
        context = f"Title: {'x' * 50}\nTitle: Short"
        assert contextual_line(context, ("title",), 40) is None

    def test_line_without_colon_is_unusable(self):
        assert contextual_line("The product is great", ("product",), 40) is None

    def test_case_insensitive_keys(self):
        assert contextual_line("CALL TO ACTION: Book today", ("call to action",), 50) == "Book today"

    def test_absent_context(self):
        assert contextual_line(None, ("title",), 40) is None


class TestTextProps:
    def test_title_prefixed_by_tone(self):
        assert generate_title("Acme cloud sync", TECH) == "Next-Gen Acme cloud sync"
        assert generate_title("Gold watch", LUXURY) == "Premium Gold watch"
        assert generate_title("Board game", ContentAnalysis(tone="playful")) == "Amazing Board game"
        assert generate_title("Consulting", PLAIN) == "Consulting"

    def test_long_prompt_truncated_to_forty(self):
        prompt = "A" * 55
        assert generate_title(prompt, PLAIN) == "A" * 40 + "..."

    def test_empty_prompt_never_yields_empty_title(self):
        assert generate_title("", PLAIN) == "Your Amazing Title"
        assert generate_title("   ", TECH) == "Next-Gen Your Amazing Title"

    def test_title_prefers_context(self):
        assert generate_title("whatever", TECH, "Product: Acme Cloud") == "Acme Cloud"

    def test_subtitle(self):
        assert generate_subtitle("x", TECH) == "Powered by Innovation"
        assert generate_subtitle("x", ContentAnalysis(tone="minimal")) == "Simple. Effective."
        assert generate_subtitle("x", TECH, "Key benefit: Saves hours") == "Saves hours"

    def test_main_text(self):
        assert generate_main_text("x", LUXURY) == "Experience Luxury Today"
        assert generate_main_text("x", PLAIN) == "Transform Your Business"
        assert generate_main_text("x", PLAIN, "CTA: Join the beta") == "Join the beta"

    @pytest.mark.parametrize(
        ("tone", "expected"),
        [
            ("tech", "Launch Now"),
            ("luxury", "Explore Premium"),
            ("playful", "Start Playing"),
            ("professional", "Get Started"),
            ("organic", "Go Natural"),
            ("minimal", "Try It"),
        ],
    )
    def test_button_text(self, tone, expected):
        assert generate_button_text(ContentAnalysis(tone=tone)) == expected


class TestNames:
    def test_brand_is_first_capitalised_word(self):
        assert extract_brand_name("launch Zephyr and Nimbus today") == "Zephyr"

    def test_brand_requires_title_case(self):
        assert extract_brand_name("ACME launch for iPhone") is None

    def test_product_is_word_before_noun(self):
        assert extract_product_name("Launch our fitness app now") == "Fitness App"

    def test_product_noun_at_start_is_ignored(self):
        assert extract_product_name("app for runners") is None


class TestTables:
    def test_features_keyed_by_industry(self):
        assert [f["title"] for f in generate_features(TECH)] == ["AI-Powered", "Cloud-Based", "Secure"]
        assert [f["title"] for f in generate_features(LUXURY)] == [
            "Premium Quality", "Exclusive", "Personalized",
        ]

    def test_default_features(self):
        features = generate_features(ContentAnalysis(industry="food"))
        assert [f["title"] for f in features] == ["Innovation", "Quality", "Performance"]

    def test_stats_keyed_by_industry(self):
        stats = generate_stats(ContentAnalysis(industry="gaming"))
        assert stats[0] == {"label": "Players", "value": 2000000, "suffix": "+", "color": "#FF6B6B"}

    def test_default_stats(self):
        assert [s["label"] for s in generate_stats(PLAIN)] == ["Users", "Rating", "Growth"]

    def test_tables_return_copies(self):
        generate_features(TECH)[0]["title"] = "Mutated"
        assert generate_features(TECH)[0]["title"] == "AI-Powered"


class TestPropSynthesizer:
    async def test_every_required_prop_is_present(self):
        synthesizer = PropSynthesizer()
        analysis = analyze("Acme fitness app for busy people")
        for template in default_catalog().templates:
            props = await synthesizer.generate_contextual_props(
                "Acme fitness app for busy people", template.id, analysis,
            )
            assert set(props) == set(template.required_props), template.id

    async def test_unknown_template_yields_empty_mapping(self):
        assert await PropSynthesizer().generate_contextual_props("x", "nope", PLAIN) == {}

    async def test_product_showcase_props(self):
        analysis = analyze("Launch the Acme fitness app")
        props = await PropSynthesizer().generate_contextual_props(
            "Launch the Acme fitness app", "product-showcase-3d", analysis,
        )
        assert props["productName"] == "Fitness App"
        assert [f["title"] for f in props["features"]] == ["AI-Powered", "Cloud-Based", "Secure"]

    async def test_shared_context_skips_lookup(self):
        knowledge = MagicMock(spec=KnowledgeClient)
        knowledge.query = AsyncMock()
        context = KnowledgeResult(status="ok", output="Tagline: Built for speed")

        props = await PropSynthesizer(knowledge=knowledge).generate_contextual_props(
            "Tech launch", "hero-animated-title", TECH, context=context,
        )

        assert props["subtitle"] == "Built for speed"
        knowledge.query.assert_not_called()

    async def test_knowledge_context_is_used(self):
        transport = make_knowledge_transport(
            generate={"generated_text": "Product name: Acme Cloud\nTagline: Sync everything", "sources": []},
        )
        knowledge = KnowledgeClient("https://kb.test", "k", transport=transport)

        props = await PropSynthesizer(knowledge=knowledge).generate_contextual_props(
            "cloud storage", "hero-animated-title", TECH,
        )

        assert props == {"title": "Acme Cloud", "subtitle": "Sync everything"}

    async def test_knowledge_http_500_falls_back_to_tone_copy(self):
        """GIVEN the knowledge service returns 500 THEN title is still non-empty tone copy."""
        knowledge = KnowledgeClient("https://kb.test", "k", transport=make_knowledge_transport(status=500))

        props = await PropSynthesizer(knowledge=knowledge).generate_contextual_props(
            "Smart home hub", "hero-animated-title", TECH,
        )

        assert props["title"] == "Next-Gen Smart home hub"
        assert props["subtitle"] == "Powered by Innovation"

    @pytest.mark.parametrize(
        ("search", "generate"),
        [
            ({"results": 5}, None),
            ({"results": [{"content_id": {"x": 1}}]}, None),
            (None, {"generated_text": {"title": "x"}}),
        ],
    )
    async def test_malformed_knowledge_response_falls_back(self, search, generate):
        """GIVEN a 200 response of the wrong shape THEN props come from the prompt alone."""
        transport = make_knowledge_transport(search=search, generate=generate)
        knowledge = KnowledgeClient("https://kb.test", "k", transport=transport)

        props = await PropSynthesizer(knowledge=knowledge).generate_contextual_props(
            "Tech app", "hero-animated-title", ContentAnalysis(),
        )

        assert props["title"]
        assert props["subtitle"]

    async def test_fetch_context_without_client(self):
        result = await PropSynthesizer().fetch_context("anything")
        assert result.status == "degraded"
