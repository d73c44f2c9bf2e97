"""Shared Gemini client pool — the text/JSON completion collaborator."""

from __future__ import annotations

import logging
import os
from typing import Any

from google import genai
from google.genai import types

from .config import VALID_THINKING_LEVELS, get_config

logger = logging.getLogger(__name__)


def _resolve_thinking_level(value: str) -> str:
    """Normalize and validate a thinking level string.

    Raises:
        ValueError: If the level is not in VALID_THINKING_LEVELS.
    """
    level = value.strip().lower()
    if level not in VALID_THINKING_LEVELS:
        allowed = ", ".join(sorted(VALID_THINKING_LEVELS))
        raise ValueError(f"Invalid thinking level '{value}'. Allowed: {allowed}")
    return level


class GeminiClient:
    """Process-wide Gemini client pool (one client per API key)."""

    _clients: dict[str, genai.Client] = {}

    @classmethod
    def get(cls, api_key: str | None = None) -> genai.Client:
        """Return (or create) the shared client for *api_key*."""
        key = api_key or get_config().gemini_api_key or os.getenv("GEMINI_API_KEY", "")
        if not key:
            raise ValueError("No Gemini API key — set GEMINI_API_KEY or pass api_key explicitly")
        if key not in cls._clients:
            cls._clients[key] = genai.Client(api_key=key)
            logger.info("Created Gemini client (key …%s)", key[-4:])
        return cls._clients[key]

    @classmethod
    async def generate(
        cls,
        contents: Any,
        *,
        model: str | None = None,
        thinking_level: str | None = None,
        temperature: float | None = None,
        system_instruction: str | None = None,
        max_output_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        """Generate text via Gemini, issuing exactly one request.

        Args:
            contents: Prompt contents (text or multimodal parts).
            model: Override model ID (defaults to config's default_model).
            thinking_level: Override thinking level (defaults to config's default).
            temperature: Sampling temperature (defaults to config's planner_temperature).
            system_instruction: System-level instruction prepended to the prompt.
            max_output_tokens: Cap on generated tokens.
            **kwargs: Forwarded to the underlying generate_content call.

        Returns:
            The model's text response with thinking parts stripped.
        """
        cfg = get_config()
        resolved_model = model or cfg.default_model
        resolved_thinking = _resolve_thinking_level(thinking_level or cfg.default_thinking_level)

        config = types.GenerateContentConfig(
            thinking_config=types.ThinkingConfig(thinking_level=resolved_thinking),
            temperature=temperature if temperature is not None else cfg.planner_temperature,
        )
        if system_instruction:
            config.system_instruction = system_instruction
        if max_output_tokens:
            config.max_output_tokens = max_output_tokens

        client = cls.get()
        response = await client.aio.models.generate_content(
            model=resolved_model,
            contents=contents,
            config=config,
            **kwargs,
        )

        # Strip thinking parts, return only user-visible text
        parts = response.candidates[0].content.parts if response.candidates else []
        text_parts = [p.text for p in (parts or []) if p.text and not getattr(p, "thought", False)]
        return "\n".join(text_parts) if text_parts else (response.text or "")

    @classmethod
    async def complete(
        cls,
        system_instructions: str,
        user_message: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Return the completion for *user_message* under *system_instructions*.

        Output may be prose, fenced, or truncated JSON; callers extract what
        they need.
        """
        return await cls.generate(
            user_message,
            system_instruction=system_instructions,
            temperature=temperature,
            max_output_tokens=max_tokens,
        )

    @classmethod
    async def close_all(cls) -> int:
        """Shut down all shared clients. Returns count closed."""
        count = 0
        for client in list(cls._clients.values()):
            try:
                await client.aio.close()
            except Exception:
                logger.debug("Async Gemini client close failed", exc_info=True)
            try:
                client.close()
            except Exception:
                logger.debug("Gemini client close failed", exc_info=True)
            count += 1
        cls._clients.clear()
        logger.info("Closed %d Gemini client(s)", count)
        return count
