"""Content analyzer — classify a marketing prompt without any external state."""

from __future__ import annotations

import logging
import re

from .models.analysis import ContentAnalysis

logger = logging.getLogger(__name__)

# Ordered (label, substrings) groups; the first group with any hit wins.
INDUSTRY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("technology", ("app", "software", "tech")),
    ("gaming", ("game", "gaming")),
    ("luxury", ("luxury", "premium")),
    ("food", ("food", "restaurant")),
    ("health", ("fitness", "health")),
)

TONE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("playful", ("fun", "playful", "game")),
    ("luxury", ("luxury", "premium", "elegant")),
    ("tech", ("tech", "ai", "futuristic")),
    ("organic", ("natural", "organic", "eco")),
    ("minimal", ("simple", "clean", "minimal")),
)

COMPLEXITY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("complex", ("advanced", "professional", "enterprise")),
    ("simple", ("simple", "basic", "easy")),
)

TONE_TO_STYLE = {
    "tech": "futuristic",
    "organic": "organic",
    "minimal": "minimal",
    "luxury": "modern",
}

INDUSTRY_FLOWS = {
    "technology": ["hero", "product", "features", "stats", "cta"],
    "gaming": ["hero", "features", "product", "cta"],
    "luxury": ["hero", "product", "features", "cta", "logo"],
}
PROFESSIONAL_FLOW = ["hero", "features", "stats", "cta"]
BASE_FLOW = ["hero", "features", "cta"]

MAX_KEYWORDS = 10

_PUNCTUATION = re.compile(r"[^\w\s]")


def _first_match(text: str, groups: tuple[tuple[str, tuple[str, ...]], ...], default: str) -> str:
    for label, needles in groups:
        if any(needle in text for needle in needles):
            return label
    return default


def extract_keywords(text: str) -> list[str]:
    """First ten words longer than three characters, punctuation stripped."""
    words = _PUNCTUATION.sub("", text.lower()).split()
    return [w for w in words if len(w) > 3][:MAX_KEYWORDS]


def suggest_flow(industry: str, tone: str) -> list[str]:
    """Ordered scene categories for an industry/tone pair."""
    if industry in INDUSTRY_FLOWS:
        return list(INDUSTRY_FLOWS[industry])
    if tone == "professional":
        return list(PROFESSIONAL_FLOW)
    return list(BASE_FLOW)


def analyze(prompt: str) -> ContentAnalysis:
    """Classify *prompt* by industry, tone, style, complexity and keywords.

    Total: an empty or signal-free prompt yields the general/professional/
    modern/medium defaults.
    """
    text = (prompt or "").lower()

    industry = _first_match(text, INDUSTRY_KEYWORDS, "general")
    tone = _first_match(text, TONE_KEYWORDS, "professional")
    complexity = _first_match(text, COMPLEXITY_KEYWORDS, "medium")

    analysis = ContentAnalysis(
        industry=industry,
        tone=tone,
        visual_style=TONE_TO_STYLE.get(tone, "modern"),
        complexity=complexity,
        keywords=extract_keywords(text),
        suggested_flow=suggest_flow(industry, tone),
    )
    logger.info(
        "Analyzed prompt: industry=%s tone=%s style=%s complexity=%s",
        analysis.industry, analysis.tone, analysis.visual_style, analysis.complexity,
    )
    return analysis
