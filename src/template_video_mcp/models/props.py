"""Typed scene props — one closed variant per template category.

Synthesized and AI-written props arrive as a loose mapping. The materializer
fills missing required names from catalog defaults, then validates the
mapping into exactly one of these variants (selected by template category)
so every value reaching a blueprint has a known shape: a string, a number,
or a list of plain objects with fixed keys.
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import Field, field_validator

from .structure import CamelModel

FEATURE_EMOJIS = ["🚀", "⭐", "⚡", "🎯", "💎", "🔥"]
FEATURE_COLORS = ["#FF6B6B", "#4ECDC4", "#FFE66D", "#FF8B94", "#A8E6CF", "#FFB6C1"]
STAT_COLORS = ["#4361ee", "#f72585", "#4cc9f0", "#4895ef", "#560bad"]


class FeatureItem(CamelModel):
    title: str
    description: str = ""
    emoji: str | None = None
    icon: str | None = None
    color: str = "#FF6B6B"


class StatItem(CamelModel):
    label: str
    value: int | float
    suffix: str = ""
    color: str = "#4361ee"


def coerce_features(value: Any) -> Any:
    """Expand a list of plain feature names into feature objects."""
    if not isinstance(value, list):
        return value
    items = []
    for index, item in enumerate(value):
        if isinstance(item, str):
            items.append({
                "title": item,
                "description": f"Amazing {item.lower()} capability",
                "emoji": FEATURE_EMOJIS[index % len(FEATURE_EMOJIS)],
                "icon": "circle" if index % 2 == 0 else "rect",
                "color": FEATURE_COLORS[index % len(FEATURE_COLORS)],
            })
        else:
            items.append(item)
    return items


def coerce_stats(value: Any) -> Any:
    """Fill in colour and suffix for stats that omit them."""
    if not isinstance(value, list):
        return value
    items = []
    for index, item in enumerate(value):
        if isinstance(item, dict):
            item = dict(item)
            if not item.get("color"):
                item["color"] = STAT_COLORS[index % len(STAT_COLORS)]
            if not item.get("suffix"):
                number = item.get("value")
                is_large = isinstance(number, (int, float)) and number > 100
                item["suffix"] = "+" if is_large else "%"
        items.append(item)
    return items


class HeroProps(CamelModel):
    kind: Literal["hero"] = "hero"
    title: str
    subtitle: str | None = None


class FeatureListProps(CamelModel):
    kind: Literal["features"] = "features"
    features: list[FeatureItem] = Field(min_length=1)

    @field_validator("features", mode="before")
    @classmethod
    def expand_feature_names(cls, value: Any) -> Any:
        return coerce_features(value)


class ProductProps(CamelModel):
    kind: Literal["product"] = "product"
    product_name: str
    features: list[FeatureItem] = Field(min_length=1)

    @field_validator("features", mode="before")
    @classmethod
    def expand_feature_names(cls, value: Any) -> Any:
        return coerce_features(value)


class StatListProps(CamelModel):
    kind: Literal["stats"] = "stats"
    stats: list[StatItem] = Field(min_length=1)

    @field_validator("stats", mode="before")
    @classmethod
    def fill_stat_defaults(cls, value: Any) -> Any:
        return coerce_stats(value)


class CtaProps(CamelModel):
    kind: Literal["cta"] = "cta"
    main_text: str
    button_text: str


class LogoProps(CamelModel):
    kind: Literal["logo"] = "logo"
    brand_name: str


class BackgroundProps(CamelModel):
    kind: Literal["background"] = "background"


SceneProps = Union[
    HeroProps, FeatureListProps, ProductProps, StatListProps, CtaProps, LogoProps, BackgroundProps
]

PROPS_BY_CATEGORY: dict[str, type[CamelModel]] = {
    "hero": HeroProps,
    "features": FeatureListProps,
    "product": ProductProps,
    "stats": StatListProps,
    "cta": CtaProps,
    "logo": LogoProps,
    "testimonials": BackgroundProps,
    "transition": BackgroundProps,
}
