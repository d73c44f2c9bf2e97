"""Structured error handling — domain exceptions, error categories, and tool error model."""

from __future__ import annotations

from enum import Enum

import httpx
from pydantic import BaseModel

GENERATION_FAILED_MESSAGE = "Template generation failed. Please try again."


class UnknownTemplateError(KeyError):
    """Raised when a template id is not present in the catalog."""

    def __init__(self, template_id: str) -> None:
        super().__init__(template_id)
        self.template_id = template_id

    def __str__(self) -> str:
        return f"Unknown template: {self.template_id}"


class StructureParseError(ValueError):
    """Raised when AI output cannot be turned into a video structure."""


class GenerationError(RuntimeError):
    """Raised when not even the deterministic fallback yields a renderable composition."""


class ErrorCategory(str, Enum):
    """Categories of errors for diagnostics."""

    INVALID_PROMPT = "INVALID_PROMPT"
    UNKNOWN_TEMPLATE = "UNKNOWN_TEMPLATE"
    AI_UNAVAILABLE = "AI_UNAVAILABLE"
    AI_OUTPUT_MALFORMED = "AI_OUTPUT_MALFORMED"
    KNOWLEDGE_UNAVAILABLE = "KNOWLEDGE_UNAVAILABLE"
    NETWORK_ERROR = "NETWORK_ERROR"
    API_QUOTA_EXCEEDED = "API_QUOTA_EXCEEDED"
    CONFIG_ERROR = "CONFIG_ERROR"
    GENERATION_FAILED = "GENERATION_FAILED"
    UNKNOWN = "UNKNOWN"


class ToolError(BaseModel):
    """Structured error returned from any tool."""

    error: str
    category: str
    hint: str
    retryable: bool = False
    retry_after_seconds: int | None = None


def categorize_error(error: Exception) -> tuple[ErrorCategory, str]:
    """Map an exception to an ErrorCategory + human-readable hint."""
    s = str(error).lower()

    if isinstance(error, GenerationError):
        return (ErrorCategory.GENERATION_FAILED, GENERATION_FAILED_MESSAGE)
    if isinstance(error, UnknownTemplateError):
        return (
            ErrorCategory.UNKNOWN_TEMPLATE,
            "Template id not in the catalog — call template_catalog to list valid ids",
        )
    if isinstance(error, StructureParseError):
        return (
            ErrorCategory.AI_OUTPUT_MALFORMED,
            "Model returned no usable JSON — the deterministic fallback will be used",
        )
    if isinstance(error, (TimeoutError, httpx.TimeoutException)) or "timed out" in s or "timeout" in s:
        return (
            ErrorCategory.NETWORK_ERROR,
            "Request timed out — try again or check connectivity",
        )
    if isinstance(error, httpx.TransportError):
        return (
            ErrorCategory.NETWORK_ERROR,
            "Network error reaching an external service — check connectivity",
        )
    if "429" in s or "quota" in s or "resource_exhausted" in s:
        return (
            ErrorCategory.API_QUOTA_EXCEEDED,
            "Rate limit hit — wait and retry",
        )
    if "api key" in s or "gemini_api_key" in s:
        return (
            ErrorCategory.CONFIG_ERROR,
            "No Gemini API key — set GEMINI_API_KEY (or ~/.config/template-video-mcp/.env)",
        )
    if "knowledge" in s or "senso" in s:
        return (
            ErrorCategory.KNOWLEDGE_UNAVAILABLE,
            "Knowledge service unavailable — check KNOWLEDGE_API_URL and KNOWLEDGE_API_KEY",
        )
    if "prompt" in s and ("empty" in s or "required" in s):
        return (
            ErrorCategory.INVALID_PROMPT,
            "Provide a non-empty marketing prompt",
        )
    if "gemini" in s or "503" in s or "unavailable" in s:
        return (
            ErrorCategory.AI_UNAVAILABLE,
            "Completion service unavailable — try again shortly",
        )

    return (ErrorCategory.UNKNOWN, str(error))


def make_tool_error(error: Exception) -> dict:
    """Create a serialisable ToolError dict from an exception."""
    cat, hint = categorize_error(error)
    retryable = cat in {
        ErrorCategory.API_QUOTA_EXCEEDED,
        ErrorCategory.NETWORK_ERROR,
        ErrorCategory.AI_UNAVAILABLE,
        ErrorCategory.GENERATION_FAILED,
    }
    return ToolError(
        error=str(error),
        category=cat.value,
        hint=hint,
        retryable=retryable,
        retry_after_seconds=60 if cat == ErrorCategory.API_QUOTA_EXCEEDED else None,
    ).model_dump(mode="json")
