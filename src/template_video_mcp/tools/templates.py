"""Template video tools — 5 tools on a FastMCP sub-server."""

from __future__ import annotations

from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..analyzer import analyze
from ..catalog import default_catalog
from ..config import get_config
from ..errors import make_tool_error
from ..knowledge import KnowledgeClient
from ..orchestrator import TemplateOrchestrator
from ..planner import VideoStructurePlanner
from ..selector import TemplateSelector
from ..tracing import trace
from ..types import Category, PromptParam

templates_server = FastMCP("templates")


def _require_prompt(prompt: str) -> str:
    """Return the stripped prompt, rejecting blank input."""
    cleaned = (prompt or "").strip()
    if not cleaned:
        raise ValueError("Prompt is required and must not be empty")
    return cleaned


@templates_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="video_generate", span_type="TOOL")
async def video_generate(prompt: PromptParam) -> dict:
    """Generate a template-based marketing video composition from a prompt.

    Classifies the prompt, plans a scene structure (AI-planned, with a
    deterministic fallback), binds props into each template and lays out
    scenes, transitions and audio cues on one timeline.

    Args:
        prompt: Short natural-language marketing prompt.

    Returns:
        Dict matching GenerationResult (camelCase keys), including the
        validated structure and the assembled composition.
    """
    try:
        prompt = _require_prompt(prompt)
    except ValueError as exc:
        return make_tool_error(exc)

    try:
        result = await TemplateOrchestrator().generate_template_video(prompt)
        return result.to_json_dict()
    except Exception as exc:
        return make_tool_error(exc)


@templates_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="video_plan", span_type="TOOL")
async def video_plan(prompt: PromptParam) -> dict:
    """Plan and validate a video structure without materializing scenes.

    Args:
        prompt: Short natural-language marketing prompt.

    Returns:
        Dict matching TemplateVideoStructure (scenes, transitions, audio).
    """
    try:
        prompt = _require_prompt(prompt)
    except ValueError as exc:
        return make_tool_error(exc)

    try:
        structure = await VideoStructurePlanner.from_config().plan_template_video(prompt)
        return structure.to_json_dict()
    except Exception as exc:
        return make_tool_error(exc)


@templates_server.tool(annotations=ToolAnnotations(readOnlyHint=True, idempotentHint=True))
@trace(name="template_analyze", span_type="TOOL")
async def template_analyze(
    prompt: PromptParam,
    scene_count: Annotated[int | None, Field(
        ge=1,
        description="Templates to select (capped by the catalog size); defaults to VIDEO_TARGET_SCENES",
    )] = None,
) -> dict:
    """Classify a prompt and show which templates the selector would choose.

    Deterministic and offline: no AI or knowledge calls.

    Args:
        prompt: Short natural-language marketing prompt.
        scene_count: Number of templates to select.

    Returns:
        Dict with the ContentAnalysis fields plus ``selected_templates``.
    """
    try:
        analysis = analyze(_require_prompt(prompt))
        count = scene_count or get_config().target_scene_count
        selected = TemplateSelector().select_optimal_templates(analysis, count)
        return {**analysis.model_dump(mode="json"), "selected_templates": selected}
    except Exception as exc:
        return make_tool_error(exc)


@templates_server.tool(annotations=ToolAnnotations(readOnlyHint=True, idempotentHint=True))
@trace(name="template_catalog", span_type="TOOL")
async def template_catalog(
    category: Annotated[Category | None, Field(description="Only list templates in this category")] = None,
) -> dict:
    """List available scene templates, transitions and audio files.

    Args:
        category: Optional template category filter.

    Returns:
        Dict with ``templates``, ``transitions`` and ``audio`` keys.
    """
    catalog = default_catalog()
    return {
        "templates": catalog.summary(category),
        "transitions": [
            {"type": name, "soundEffect": catalog.transition(name).sound_effect}
            for name in catalog.transition_types
        ],
        "audio": {
            "background": list(catalog.audio.background),
            "effects": list(catalog.audio.effects),
        },
    }


@templates_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    )
)
@trace(name="knowledge_sync_taxonomy", span_type="TOOL")
async def knowledge_sync_taxonomy() -> dict:
    """Ensure the canonical marketing taxonomy exists in the knowledge service.

    Returns:
        Dict matching TaxonomySyncResult; ``status="degraded"`` with a reason
        when the service is unconfigured or unreachable.
    """
    try:
        result = await KnowledgeClient.from_config().sync_taxonomy()
        return result.model_dump(mode="json")
    except Exception as exc:
        return make_tool_error(exc)
