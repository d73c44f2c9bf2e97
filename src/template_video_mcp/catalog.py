"""Template catalog — the registry of scene templates, transitions and audio.

Pure data plus lookup helpers. Each template carries a data-driven render
``blueprint``: nested mappings/lists whose string leaves may hold
``{SCENE_NAME}`` or ``{propName}`` placeholders. The materializer binds
them; the rendering engine consumes the result. The catalog is immutable and
shared read-only across concurrent requests; pass an alternate
``TemplateCatalog`` to the selector/synthesizer/validator/materializer to
test against a different library.
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnknownTemplateError
from .types import Category, Complexity, VisualStyle


class SceneTemplate(BaseModel):
    """A named, parameterized blueprint for one segment of the video."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    category: Category
    complexity: Complexity
    visual_style: VisualStyle
    required_props: tuple[str, ...] = ()
    blueprint: dict[str, Any] = Field(default_factory=dict)


class TransitionSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    sound_effect: str


class AudioLibrary(BaseModel):
    model_config = ConfigDict(frozen=True)

    background: tuple[str, ...]
    effects: tuple[str, ...]


# ---------------------------------------------------------------------------
# Blueprint helpers
# ---------------------------------------------------------------------------


def _gradient(*colors: str, angle: int = 135) -> dict:
    return {"type": "gradient", "angle": angle, "colors": list(colors)}


def _text(role: str, content: str, animation: str, **style: Any) -> dict:
    return {"type": "text", "role": role, "content": content, "animation": animation, "style": style}


def _scene(background: dict, *layers: dict, effects: list[str] | None = None) -> dict:
    return {
        "component": "{SCENE_NAME}",
        "background": background,
        "effects": effects or [],
        "layers": list(layers),
    }


# ---------------------------------------------------------------------------
# Scene templates (catalog order is the selector's tie-breaker)
# ---------------------------------------------------------------------------

_TEMPLATES: tuple[SceneTemplate, ...] = (
    SceneTemplate(
        id="hero-animated-title",
        name="Animated Hero Title",
        description="Large animated title with spring animation",
        category="hero",
        complexity="medium",
        visual_style="modern",
        required_props=("title", "subtitle"),
        blueprint=_scene(
            _gradient("#667eea", "#764ba2"),
            _text("title", "{title}", "spring-scale", fontSize=80, fontWeight="bold", color="white"),
            _text("subtitle", "{subtitle}", "fade-up", fontSize=32, color="rgba(255,255,255,0.85)"),
        ),
    ),
    SceneTemplate(
        id="hero-kinetic-text",
        name="Kinetic Typography Hero",
        description="Dynamic word-by-word text animation with motion blur effects",
        category="hero",
        complexity="complex",
        visual_style="futuristic",
        required_props=("title",),
        blueprint=_scene(
            _gradient("#0f0c29", "#302b63", "#24243e"),
            _text("title", "{title}", "word-by-word", fontSize=96, fontWeight=900, color="#64C8FF"),
            effects=["motion-blur", "glow"],
        ),
    ),
    SceneTemplate(
        id="hero-3d-float",
        name="3D Floating Elements Hero",
        description="Hero with 3D floating geometric elements",
        category="hero",
        complexity="complex",
        visual_style="modern",
        required_props=("title", "subtitle"),
        blueprint=_scene(
            _gradient("#1e3c72", "#2a5298"),
            {"type": "shapes", "shapes": ["cube", "sphere", "torus"], "animation": "float-3d"},
            _text("title", "{title}", "spring-scale", fontSize=84, fontWeight="bold", color="white"),
            _text("subtitle", "{subtitle}", "fade-up", fontSize=30, color="#E0E7FF"),
        ),
    ),
    SceneTemplate(
        id="features-morphing-cards",
        name="Morphing Feature Cards",
        description="Features displayed as morphing 3D cards with particle effects",
        category="features",
        complexity="complex",
        visual_style="futuristic",
        required_props=("features",),
        blueprint=_scene(
            _gradient("#000428", "#004e92"),
            {"type": "cards", "items": "{features}", "animation": "morph-3d", "stagger": 15},
            effects=["particles"],
        ),
    ),
    SceneTemplate(
        id="features-wave-reveal",
        name="Wave Reveal Features",
        description="Features revealed by animated wave effects",
        category="features",
        complexity="complex",
        visual_style="organic",
        required_props=("features",),
        blueprint=_scene(
            _gradient("#134E5E", "#71B280"),
            {"type": "list", "items": "{features}", "animation": "wave-reveal", "stagger": 20},
            effects=["wave"],
        ),
    ),
    SceneTemplate(
        id="cta-neon-pulse",
        name="Neon Pulse CTA",
        description="Futuristic neon-style call-to-action with pulse effects",
        category="cta",
        complexity="complex",
        visual_style="futuristic",
        required_props=("mainText", "buttonText"),
        blueprint=_scene(
            {"type": "solid", "color": "#0a0a0a"},
            _text("headline", "{mainText}", "neon-flicker", fontSize=72, color="#00FFFF"),
            {"type": "button", "label": "{buttonText}", "animation": "pulse", "color": "#FF00FF"},
            effects=["neon-glow"],
        ),
    ),
    SceneTemplate(
        id="cta-liquid-morph",
        name="Liquid Morph CTA",
        description="Organic liquid morphing effects with call-to-action",
        category="cta",
        complexity="complex",
        visual_style="organic",
        required_props=("mainText", "buttonText"),
        blueprint=_scene(
            _gradient("#43cea2", "#185a9d"),
            {"type": "blob", "animation": "liquid-morph"},
            _text("headline", "{mainText}", "fade-up", fontSize=64, color="white"),
            {"type": "button", "label": "{buttonText}", "animation": "spring-scale", "color": "#FFFFFF"},
        ),
    ),
    SceneTemplate(
        id="logo-reveal",
        name="Logo Reveal",
        description="Animated logo with brand name",
        category="logo",
        complexity="medium",
        visual_style="modern",
        required_props=("brandName",),
        blueprint=_scene(
            {"type": "solid", "color": "#111827"},
            {"type": "logo-mark", "animation": "draw-in"},
            _text("brand", "{brandName}", "letter-spacing", fontSize=64, fontWeight="bold", color="white"),
        ),
    ),
    SceneTemplate(
        id="product-showcase-3d",
        name="3D Product Showcase",
        description="Rotating 3D product display with dynamic lighting",
        category="product",
        complexity="complex",
        visual_style="modern",
        required_props=("productName", "features"),
        blueprint=_scene(
            _gradient("#232526", "#414345"),
            {"type": "product-stage", "animation": "rotate-3d", "lighting": "dynamic"},
            _text("product", "{productName}", "spring-scale", fontSize=72, color="white"),
            {"type": "badges", "items": "{features}", "animation": "orbit"},
        ),
    ),
    SceneTemplate(
        id="stats-chart-animated",
        name="Animated Chart Visualization",
        description="Professional animated bar chart with data visualization",
        category="stats",
        complexity="complex",
        visual_style="modern",
        required_props=("stats",),
        blueprint=_scene(
            {"type": "solid", "color": "#0f172a"},
            {"type": "bar-chart", "items": "{stats}", "animation": "grow", "stagger": 10},
        ),
    ),
    SceneTemplate(
        id="stats-circular-progress",
        name="Circular Progress Indicators",
        description="Modern circular progress rings with animated counters",
        category="stats",
        complexity="medium",
        visual_style="modern",
        required_props=("stats",),
        blueprint=_scene(
            _gradient("#141E30", "#243B55"),
            {"type": "progress-rings", "items": "{stats}", "animation": "count-up"},
        ),
    ),
    SceneTemplate(
        id="hero-bubble-text",
        name="Bubble Pop Text Animation",
        description="Letters appear in animated bubbles with spring physics",
        category="hero",
        complexity="complex",
        visual_style="modern",
        required_props=("title",),
        blueprint=_scene(
            _gradient("#ff9a9e", "#fad0c4"),
            _text("title", "{title}", "bubble-pop", fontSize=88, fontWeight="bold", color="white"),
        ),
    ),
    SceneTemplate(
        id="hero-typewriter",
        name="Typewriter Animation",
        description="Classic typewriter effect with animated cursor",
        category="hero",
        complexity="medium",
        visual_style="retro",
        required_props=("title",),
        blueprint=_scene(
            {"type": "solid", "color": "#1a1a1a"},
            _text("title", "{title}", "typewriter", fontSize=64, fontFamily="monospace", color="#33FF33"),
            {"type": "cursor", "animation": "blink"},
        ),
    ),
    SceneTemplate(
        id="features-animated-list",
        name="Animated Feature List",
        description="Features slide in with colorful icons and smooth animations",
        category="features",
        complexity="medium",
        visual_style="modern",
        required_props=("features",),
        blueprint=_scene(
            {"type": "solid", "color": "#FAFAFA"},
            {"type": "list", "items": "{features}", "animation": "slide-in", "stagger": 12},
        ),
    ),
    SceneTemplate(
        id="background-liquid-wave",
        name="Liquid Wave Background",
        description="Flowing liquid wave animation with gradient colors",
        category="transition",
        complexity="complex",
        visual_style="organic",
        required_props=(),
        blueprint=_scene(
            _gradient("#4facfe", "#00f2fe"),
            {"type": "waves", "count": 3, "animation": "flow"},
        ),
    ),
    SceneTemplate(
        id="hero-retro-neon",
        name="Retro Neon Title",
        description="Synthwave-style neon text with retro grid background",
        category="hero",
        complexity="complex",
        visual_style="retro",
        required_props=("title", "subtitle"),
        blueprint=_scene(
            _gradient("#2b1055", "#7597de", angle=180),
            {"type": "grid", "perspective": True, "animation": "scroll"},
            _text("title", "{title}", "neon-flicker", fontSize=90, color="#FF2A6D"),
            _text("subtitle", "{subtitle}", "fade-up", fontSize=34, color="#05D9E8"),
        ),
    ),
    SceneTemplate(
        id="features-holographic-cards",
        name="Holographic Feature Cards",
        description="Futuristic holographic cards with prismatic effects",
        category="features",
        complexity="complex",
        visual_style="futuristic",
        required_props=("features",),
        blueprint=_scene(
            {"type": "solid", "color": "#050510"},
            {"type": "cards", "items": "{features}", "animation": "hologram-flip", "stagger": 18},
            effects=["prismatic"],
        ),
    ),
)

_TRANSITIONS: tuple[TransitionSpec, ...] = (
    TransitionSpec(name="fade", sound_effect="bubble-pop.mp3"),
    TransitionSpec(name="slide", sound_effect="whoosh-short-realistic.mp3"),
    TransitionSpec(name="wipe", sound_effect="bubble-pop.mp3"),
)

_AUDIO = AudioLibrary(
    background=("modern-electronic.mp3", "corporate-upbeat.mp3", "motivational.mp3"),
    effects=(
        "impact-whoosh.mp3",
        "transition-swoosh.mp3",
        "text-appear.mp3",
        "final-impact.mp3",
        "whoosh-short-realistic.mp3",
        "bubble-pop.mp3",
    ),
)

_DEFAULT_FEATURES = (
    {"title": "Innovation", "description": "Cutting-edge technology", "emoji": "🚀", "color": "#FF6B6B"},
    {"title": "Quality", "description": "Premium experience", "emoji": "⭐", "color": "#4ECDC4"},
    {"title": "Speed", "description": "Lightning fast", "emoji": "⚡", "color": "#FFE66D"},
)

_DEFAULT_STATS = (
    {"label": "Users", "value": 50000, "suffix": "+", "color": "#FF6B6B"},
    {"label": "Downloads", "value": 100000, "suffix": "+", "color": "#4ECDC4"},
    {"label": "Rating", "value": 4.9, "suffix": "/5", "color": "#FFE66D"},
)

DEFAULT_PROP_VALUES: Mapping[str, Any] = MappingProxyType({
    "title": "Your Amazing Title",
    "subtitle": "Discover Something Incredible",
    "mainText": "Ready to Get Started?",
    "buttonText": "Start Now",
    "brandName": "Your Brand",
    "productName": "Amazing Product",
    "features": _DEFAULT_FEATURES,
    "stats": _DEFAULT_STATS,
})

FALLBACK_PROP_VALUE = "Default Value"


class TemplateCatalog:
    """Read-only registry of templates, transitions, audio and prop defaults."""

    def __init__(
        self,
        templates: tuple[SceneTemplate, ...],
        transitions: tuple[TransitionSpec, ...],
        audio: AudioLibrary,
        prop_defaults: Mapping[str, Any] = DEFAULT_PROP_VALUES,
    ) -> None:
        self._templates = tuple(templates)
        self._by_id = {t.id: t for t in self._templates}
        if len(self._by_id) != len(self._templates):
            raise ValueError("Template ids must be unique")
        self._transitions = {t.name: t for t in transitions}
        self.audio = audio
        self._prop_defaults = prop_defaults

    @property
    def templates(self) -> tuple[SceneTemplate, ...]:
        return self._templates

    @property
    def transition_types(self) -> tuple[str, ...]:
        return tuple(self._transitions)

    def ids(self) -> list[str]:
        return [t.id for t in self._templates]

    def has(self, template_id: str) -> bool:
        return template_id in self._by_id

    def get(self, template_id: str) -> SceneTemplate:
        """Return the template for *template_id*.

        Raises:
            UnknownTemplateError: If the id is not in the catalog.
        """
        try:
            return self._by_id[template_id]
        except KeyError:
            raise UnknownTemplateError(template_id) from None

    def by_category(self, category: str) -> list[SceneTemplate]:
        return [t for t in self._templates if t.category == category]

    def by_style(self, style: str) -> list[SceneTemplate]:
        return [t for t in self._templates if t.visual_style == style]

    def by_complexity(self, complexity: str) -> list[SceneTemplate]:
        return [t for t in self._templates if t.complexity == complexity]

    def has_transition(self, name: str) -> bool:
        return name in self._transitions

    def transition(self, name: str) -> TransitionSpec:
        return self._transitions[name]

    def has_background(self, src: str) -> bool:
        return src in self.audio.background

    def has_effect(self, src: str) -> bool:
        return src in self.audio.effects

    def default_prop(self, name: str) -> Any:
        """Return a fresh copy of the catalog default for prop *name*."""
        value = self._prop_defaults.get(name, FALLBACK_PROP_VALUE)
        if isinstance(value, tuple):
            return [dict(item) if isinstance(item, Mapping) else item for item in value]
        return value

    def summary(self, category: str | None = None) -> list[dict]:
        """AI-facing listing of templates, without blueprints."""
        templates = self.by_category(category) if category else self._templates
        return [
            {
                "id": t.id,
                "name": t.name,
                "description": t.description,
                "category": t.category,
                "complexity": t.complexity,
                "visualStyle": t.visual_style,
                "requiredProps": list(t.required_props),
            }
            for t in templates
        ]


@lru_cache(maxsize=1)
def default_catalog() -> TemplateCatalog:
    """Return the shared process-wide catalog."""
    return TemplateCatalog(_TEMPLATES, _TRANSITIONS, _AUDIO)
