"""Tests for prompt classification."""

from __future__ import annotations

import pytest

from template_video_mcp.analyzer import analyze, extract_keywords, suggest_flow


class TestAnalyze:
    def test_tech_startup_prompt(self):
        """GIVEN a tech launch prompt THEN technology/tech/futuristic with product and stats."""
        analysis = analyze("Tech startup product launch with futuristic design")
        assert analysis.industry == "technology"
        assert analysis.tone == "tech"
        assert analysis.visual_style == "futuristic"
        assert analysis.complexity == "medium"
        assert "product" in analysis.suggested_flow
        assert "stats" in analysis.suggested_flow

    @pytest.mark.parametrize("prompt", ["", "   ", "?!", None])
    def test_empty_prompt_uses_defaults(self, prompt):
        analysis = analyze(prompt)
        assert analysis.industry == "general"
        assert analysis.tone == "professional"
        assert analysis.visual_style == "modern"
        assert analysis.complexity == "medium"
        assert analysis.suggested_flow == ["hero", "features", "stats", "cta"]
        assert analysis.keywords == []

    def test_first_group_wins(self):
        """'game' hits both gaming industry and playful tone; luxury tone comes later."""
        analysis = analyze("A premium game for everyone")
        assert analysis.industry == "gaming"
        assert analysis.tone == "playful"
        assert analysis.visual_style == "modern"

    def test_substring_matching(self):
        """'happy' contains 'app', so the industry is technology."""
        assert analyze("A happy bakery").industry == "technology"

    def test_luxury_tone_maps_to_modern(self):
        analysis = analyze("Elegant jewelry collection")
        assert analysis.tone == "luxury"
        assert analysis.visual_style == "modern"
        assert analysis.industry == "general"

    def test_organic_and_minimal_styles(self):
        assert analyze("Natural skincare").visual_style == "organic"
        assert analyze("A clean look").visual_style == "minimal"

    @pytest.mark.parametrize(
        ("prompt", "expected"),
        [
            ("Advanced analytics", "complex"),
            ("Enterprise solution", "complex"),
            ("Basic plan", "simple"),
            ("Easy setup", "simple"),
            ("A bakery", "medium"),
        ],
    )
    def test_complexity(self, prompt, expected):
        assert analyze(prompt).complexity == expected

    def test_food_and_health_use_default_flow(self):
        assert analyze("Organic restaurant").suggested_flow == ["hero", "features", "cta"]
        assert analyze("Fitness studio").industry == "health"


class TestKeywords:
    def test_strips_punctuation_and_short_words(self):
        assert extract_keywords("Launch: the NEW app, today!") == ["launch", "today"]

    def test_caps_at_ten(self):
        words = " ".join(f"word{i}" for i in range(15))
        keywords = extract_keywords(words)
        assert len(keywords) == 10
        assert keywords[0] == "word0"


class TestSuggestFlow:
    def test_industry_tables(self):
        assert suggest_flow("technology", "tech") == ["hero", "product", "features", "stats", "cta"]
        assert suggest_flow("gaming", "playful") == ["hero", "features", "product", "cta"]
        assert suggest_flow("luxury", "luxury") == ["hero", "product", "features", "cta", "logo"]

    def test_professional_and_default(self):
        assert suggest_flow("general", "professional") == ["hero", "features", "stats", "cta"]
        assert suggest_flow("food", "organic") == ["hero", "features", "cta"]

    def test_returns_fresh_list(self):
        flow = suggest_flow("technology", "tech")
        flow.append("logo")
        assert "logo" not in suggest_flow("technology", "tech")
