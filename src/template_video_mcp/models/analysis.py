"""Prompt analysis and knowledge-lookup result models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from ..types import Category, Complexity, Industry, Tone, VisualStyle


class ContentAnalysis(BaseModel):
    """Classification of a marketing prompt, derived purely from its text."""

    industry: Industry = "general"
    tone: Tone = "professional"
    visual_style: VisualStyle = "modern"
    complexity: Complexity = "medium"
    keywords: list[str] = Field(default_factory=list, max_length=10)
    suggested_flow: list[Category] = Field(default_factory=lambda: ["hero", "features", "cta"])


class KnowledgeResult(BaseModel):
    """Outcome of a best-effort knowledge lookup.

    ``status="degraded"`` means no usable context; ``reason`` says why.
    Callers branch on status instead of catching exceptions.
    """

    status: Literal["ok", "degraded"] = "degraded"
    output: str | None = None
    sources: list[dict] = Field(default_factory=list)
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok" and bool(self.output)

    @classmethod
    def degraded(cls, reason: str) -> KnowledgeResult:
        return cls(status="degraded", reason=reason)


class TaxonomySyncResult(BaseModel):
    """Outcome of ensuring the canonical knowledge taxonomy exists."""

    status: Literal["ok", "degraded"] = "ok"
    created_categories: list[str] = Field(default_factory=list)
    created_topics: list[str] = Field(default_factory=list)
    reason: str = ""
