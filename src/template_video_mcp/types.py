"""Shared type aliases for catalog fields and tool parameters."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

# ── Literal enums ────────────────────────────────────────────────────────────

Category = Literal["hero", "features", "testimonials", "cta", "logo", "product", "stats", "transition"]
Complexity = Literal["simple", "medium", "complex"]
VisualStyle = Literal["minimal", "modern", "futuristic", "organic", "retro"]
Tone = Literal["professional", "playful", "luxury", "tech", "organic", "minimal"]
Industry = Literal["technology", "gaming", "luxury", "food", "health", "general"]
TransitionType = Literal["fade", "slide", "wipe"]

# ── Annotated aliases ────────────────────────────────────────────────────────

PromptParam = Annotated[str, Field(
    min_length=1,
    max_length=2000,
    description="Short natural-language marketing prompt, e.g. 'Tech startup product launch'",
)]
