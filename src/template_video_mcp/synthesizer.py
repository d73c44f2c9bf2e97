"""Prop synthesizer — concrete prop values for a template from the prompt.

Text props prefer a line from the knowledge-lookup output when one fits,
otherwise fall back to tone-keyed copy. Lists (features, stats) come from
industry-keyed tables. Synthesis never fails: a degraded lookup only means
prompt-only heuristics.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable

from .catalog import TemplateCatalog, default_catalog
from .knowledge import CONTEXT_INSTRUCTIONS, KnowledgeClient
from .models.analysis import ContentAnalysis, KnowledgeResult

logger = logging.getLogger(__name__)

TITLE_MAX = 40
SUBTITLE_MAX = 60
MAIN_TEXT_MAX = 50

TITLE_KEYS = ("title", "name", "product")
SUBTITLE_KEYS = ("tagline", "benefit", "value proposition")
MAIN_TEXT_KEYS = ("call to action", "cta", "ready to")

TITLE_PREFIXES = {"tech": "Next-Gen ", "luxury": "Premium ", "playful": "Amazing "}

SUBTITLES = {
    "tech": "Powered by Innovation",
    "luxury": "Experience Excellence",
    "playful": "Fun Meets Function",
    "professional": "Your Success Partner",
    "organic": "Natural Solutions",
    "minimal": "Simple. Effective.",
}

MAIN_TEXTS = {
    "tech": "Ready to Innovate?",
    "luxury": "Experience Luxury Today",
    "playful": "Join the Fun!",
    "professional": "Transform Your Business",
    "organic": "Go Natural Today",
    "minimal": "Keep It Simple",
}

BUTTON_TEXTS = {
    "tech": "Launch Now",
    "luxury": "Explore Premium",
    "playful": "Start Playing",
    "professional": "Get Started",
    "organic": "Go Natural",
    "minimal": "Try It",
}

PRODUCT_NOUNS = ("app", "software", "platform", "service", "product", "tool", "system")

FEATURE_SETS: dict[str, tuple[dict[str, str], ...]] = {
    "technology": (
        {"title": "AI-Powered", "description": "Smart automation", "emoji": "🤖", "color": "#64C8FF"},
        {"title": "Cloud-Based", "description": "Access anywhere", "emoji": "☁️", "color": "#4ECDC4"},
        {"title": "Secure", "description": "Enterprise-grade security", "emoji": "🔒", "color": "#FF6B6B"},
    ),
    "gaming": (
        {"title": "Epic Graphics", "description": "Stunning visuals", "emoji": "🎮", "color": "#FF6B6B"},
        {"title": "Multiplayer", "description": "Play with friends", "emoji": "👥", "color": "#4ECDC4"},
        {"title": "Achievements", "description": "Unlock rewards", "emoji": "🏆", "color": "#FFE66D"},
    ),
    "luxury": (
        {"title": "Premium Quality", "description": "Crafted to perfection", "emoji": "💎", "color": "#FFD700"},
        {"title": "Exclusive", "description": "Limited edition", "emoji": "⭐", "color": "#FF6B6B"},
        {"title": "Personalized", "description": "Tailored for you", "emoji": "🎯", "color": "#4ECDC4"},
    ),
}
DEFAULT_FEATURES = (
    {"title": "Innovation", "description": "Cutting-edge technology", "emoji": "🚀", "color": "#FF6B6B"},
    {"title": "Quality", "description": "Premium experience", "emoji": "⭐", "color": "#4ECDC4"},
    {"title": "Performance", "description": "Lightning fast", "emoji": "⚡", "color": "#FFE66D"},
)

STAT_SETS: dict[str, tuple[dict[str, Any], ...]] = {
    "technology": (
        {"label": "Users", "value": 100000, "suffix": "+", "color": "#64C8FF"},
        {"label": "Uptime", "value": 99.9, "suffix": "%", "color": "#4ECDC4"},
        {"label": "Performance", "value": 10, "suffix": "x", "color": "#FFE66D"},
    ),
    "gaming": (
        {"label": "Players", "value": 2000000, "suffix": "+", "color": "#FF6B6B"},
        {"label": "Rating", "value": 4.8, "suffix": "/5", "color": "#FFE66D"},
        {"label": "Downloads", "value": 5000000, "suffix": "+", "color": "#4ECDC4"},
    ),
    "luxury": (
        {"label": "Customers", "value": 50000, "suffix": "+", "color": "#FFD700"},
        {"label": "Satisfaction", "value": 98, "suffix": "%", "color": "#FF6B6B"},
        {"label": "Rating", "value": 4.9, "suffix": "/5", "color": "#4ECDC4"},
    ),
}
DEFAULT_STATS = (
    {"label": "Users", "value": 50000, "suffix": "+", "color": "#FF6B6B"},
    {"label": "Rating", "value": 4.9, "suffix": "/5", "color": "#4ECDC4"},
    {"label": "Growth", "value": 300, "suffix": "%", "color": "#FFE66D"},
)

_LABEL_PREFIX = re.compile(r"^[^:]*:?\s*")
_BRAND_WORD = re.compile(r"^[A-Z][a-z]+$")


def contextual_line(context: str | None, keys: tuple[str, ...], max_length: int) -> str | None:
    """Value of the first context line mentioning any of *keys*.

    Everything up to and including the first colon is dropped, so a line
    with no colon yields nothing. Values longer than *max_length* are
    rejected.
    """
    if not context:
        return None
    for line in context.split("\n"):
        lowered = line.lower()
        if any(key in lowered for key in keys):
            value = _LABEL_PREFIX.sub("", line, count=1).strip()
            if value and len(value) <= max_length:
                return value
            return None
    return None


def extract_brand_name(prompt: str) -> str | None:
    """First capitalised word (``Acme``) in the prompt."""
    for word in prompt.split():
        if _BRAND_WORD.match(word):
            return word
    return None


def extract_product_name(prompt: str) -> str | None:
    """Word preceding the first product noun, e.g. ``"fitness app"`` -> ``"Fitness App"``."""
    words = prompt.lower().split()
    for index, word in enumerate(words):
        if word in PRODUCT_NOUNS and index > 0:
            return f"{words[index - 1].capitalize()} {word.capitalize()}"
    return None


def generate_title(prompt: str, analysis: ContentAnalysis, context: str | None = None) -> str:
    found = contextual_line(context, TITLE_KEYS, TITLE_MAX)
    if found:
        return found
    prompt = prompt.strip()
    if not prompt:
        base = "Your Amazing Title"
    elif len(prompt) > TITLE_MAX:
        base = prompt[:TITLE_MAX] + "..."
    else:
        base = prompt
    return TITLE_PREFIXES.get(analysis.tone, "") + base


def generate_subtitle(prompt: str, analysis: ContentAnalysis, context: str | None = None) -> str:
    found = contextual_line(context, SUBTITLE_KEYS, SUBTITLE_MAX)
    return found or SUBTITLES.get(analysis.tone, "Discover the Difference")


def generate_main_text(prompt: str, analysis: ContentAnalysis, context: str | None = None) -> str:
    found = contextual_line(context, MAIN_TEXT_KEYS, MAIN_TEXT_MAX)
    return found or MAIN_TEXTS.get(analysis.tone, "Ready to Get Started?")


def generate_button_text(analysis: ContentAnalysis) -> str:
    return BUTTON_TEXTS.get(analysis.tone, "Start Now")


def generate_features(analysis: ContentAnalysis) -> list[dict[str, str]]:
    return [dict(item) for item in FEATURE_SETS.get(analysis.industry, DEFAULT_FEATURES)]


def generate_stats(analysis: ContentAnalysis) -> list[dict[str, Any]]:
    return [dict(item) for item in STAT_SETS.get(analysis.industry, DEFAULT_STATS)]


class PropSynthesizer:
    """Fill a template's required props for a given prompt and analysis.

    Args:
        catalog: Template registry; defaults to the shared catalog.
        knowledge: Optional knowledge client. ``None`` disables lookups.
        max_results: Search breadth passed to the knowledge service.
    """

    def __init__(
        self,
        catalog: TemplateCatalog | None = None,
        knowledge: KnowledgeClient | None = None,
        max_results: int = 2,
    ) -> None:
        self.catalog = catalog or default_catalog()
        self.knowledge = knowledge
        self.max_results = max_results

    async def fetch_context(self, prompt: str) -> KnowledgeResult:
        """Best-effort knowledge lookup for *prompt*; degraded when unavailable."""
        if self.knowledge is None:
            return KnowledgeResult.degraded("knowledge lookup disabled")
        result = await self.knowledge.query(prompt, CONTEXT_INSTRUCTIONS, self.max_results)
        if result.ok:
            logger.debug("Knowledge context preview: %.150s", result.output)
        else:
            logger.info("No knowledge context (%s); using prompt heuristics", result.reason)
        return result

    async def generate_contextual_props(
        self,
        prompt: str,
        template_id: str,
        analysis: ContentAnalysis,
        *,
        context: KnowledgeResult | None = None,
    ) -> dict[str, Any]:
        """Return a value for every required prop of *template_id*.

        Unknown template ids yield an empty mapping. Pass *context* to reuse
        one lookup across several scenes of the same request.
        """
        if not self.catalog.has(template_id):
            logger.warning("Cannot synthesize props for unknown template %s", template_id)
            return {}
        template = self.catalog.get(template_id)
        if not template.required_props:
            return {}

        if context is None:
            context = await self.fetch_context(prompt)
        text = context.output if context.ok else None

        generators: dict[str, Callable[[], Any]] = {
            "title": lambda: generate_title(prompt, analysis, text),
            "subtitle": lambda: generate_subtitle(prompt, analysis, text),
            "mainText": lambda: generate_main_text(prompt, analysis, text),
            "buttonText": lambda: generate_button_text(analysis),
            "brandName": lambda: extract_brand_name(prompt) or "Your Brand",
            "productName": lambda: extract_product_name(prompt) or "Amazing Product",
            "features": lambda: generate_features(analysis),
            "stats": lambda: generate_stats(analysis),
        }

        props: dict[str, Any] = {}
        for name in template.required_props:
            generator = generators.get(name)
            props[name] = generator() if generator else self.catalog.default_prop(name)
        return props
