"""Knowledge retrieval client — best-effort marketing context from a content corpus.

Talks to a Senso-style REST API over ``httpx``: semantic search over the
ingested corpus, then a grounded generation restricted to the matching
content ids. Every failure (unconfigured, unreachable, timeout, non-2xx,
malformed body) becomes a ``degraded`` result; nothing here raises into
the generation pipeline.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from . import tracing
from .config import get_config
from .models.analysis import KnowledgeResult, TaxonomySyncResult

logger = logging.getLogger(__name__)

CONTEXT_INSTRUCTIONS = (
    "Extract specific details about features, benefits, brand values, and key messaging "
    "that would be useful for creating marketing content."
)

CANONICAL_TAXONOMY: tuple[dict[str, Any], ...] = (
    {
        "name": "Product Assets",
        "topics": [{"name": "Product specifications", "description": "Tech specs, sheets"}],
    },
    {
        "name": "Marketing Content",
        "topics": [
            {"name": "Taglines & slogans"},
            {"name": "Ad copy", "description": "Video scripts, web banners"},
            {"name": "Campaign briefs"},
        ],
    },
)


def _is_content_id(value: Any) -> bool:
    """Content ids are non-empty strings or integers."""
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, str) and bool(value))


class KnowledgeClient:
    """Async client for the knowledge service.

    Args:
        base_url: API root, e.g. ``https://sdk.senso.ai/api/v1``.
        api_key: Sent as ``X-API-Key``. Empty disables all calls.
        timeout: Per-request timeout in seconds.
        transport: Optional ``httpx`` transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls) -> KnowledgeClient:
        cfg = get_config()
        return cls(cfg.knowledge_api_url, cfg.knowledge_api_key, cfg.knowledge_timeout)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json", "X-API-Key": self.api_key},
            timeout=self.timeout,
            transport=self._transport,
        )

    async def query(
        self,
        search_term: str,
        instructions: str = CONTEXT_INSTRUCTIONS,
        max_results: int = 2,
    ) -> KnowledgeResult:
        """Search the corpus for *search_term* and generate context from the hits."""
        with tracing.span(
            "knowledge_query", span_type="RETRIEVER", attributes={"max_results": max_results},
        ) as live:
            result = await self._query(search_term, instructions, max_results)
            tracing.annotate(live, status=result.status, reason=result.reason)
        return result

    async def _query(self, search_term: str, instructions: str, max_results: int) -> KnowledgeResult:
        if not self.enabled:
            return KnowledgeResult.degraded("knowledge service not configured")
        if not search_term.strip():
            return KnowledgeResult.degraded("empty search term")

        try:
            async with self._client() as client:
                search = await client.post(
                    "/search", json={"query": search_term, "max_results": max_results},
                )
                search.raise_for_status()
                payload = search.json()
                chunks = (payload.get("results") or []) if isinstance(payload, dict) else None
                if not isinstance(chunks, list):
                    return KnowledgeResult.degraded("malformed search response")
                content_ids = list(dict.fromkeys(
                    c["content_id"] for c in chunks
                    if isinstance(c, dict) and _is_content_id(c.get("content_id"))
                ))
                logger.debug("Knowledge search returned %d chunk(s)", len(chunks))
                if not content_ids:
                    return KnowledgeResult.degraded("no relevant content")

                generated = await client.post(
                    "/generate",
                    json={
                        "content_type": search_term,
                        "instructions": instructions,
                        "content_ids": content_ids,
                        "max_results": 1,
                        "save": False,
                    },
                )
                generated.raise_for_status()
                data = generated.json()

            if not isinstance(data, dict):
                return KnowledgeResult.degraded("malformed generation response")
            output = data.get("generated_text")
            if output is not None and not isinstance(output, str):
                return KnowledgeResult.degraded("malformed generation response")
            if not output or not output.strip():
                return KnowledgeResult.degraded("empty generation")
            sources = data.get("sources")
            sources = [s for s in sources if isinstance(s, dict)] if isinstance(sources, list) else []
            logger.info("Knowledge context: %d chars from %d source(s)", len(output), len(sources))
            return KnowledgeResult(status="ok", output=output, sources=sources)
        except (httpx.HTTPError, ValueError, AttributeError, KeyError, TypeError) as exc:
            logger.warning("Knowledge lookup failed, continuing without context: %s", exc)
            return KnowledgeResult.degraded(f"{type(exc).__name__}: {exc}")

    async def sync_taxonomy(self) -> TaxonomySyncResult:
        """Create any canonical category or topic missing from the service."""
        with tracing.span("knowledge_sync_taxonomy") as live:
            result = await self._sync_taxonomy()
            tracing.annotate(
                live,
                status=result.status,
                reason=result.reason,
                created_categories=len(result.created_categories),
                created_topics=len(result.created_topics),
            )
        return result

    async def _sync_taxonomy(self) -> TaxonomySyncResult:
        if not self.enabled:
            return TaxonomySyncResult(status="degraded", reason="knowledge service not configured")

        created_categories: list[str] = []
        created_topics: list[str] = []
        try:
            async with self._client() as client:
                listing = await client.get("/categories/all")
                listing.raise_for_status()
                existing = {c["name"]: c for c in listing.json() if isinstance(c, dict)}

                for category in CANONICAL_TAXONOMY:
                    found = existing.get(category["name"])
                    if found is None:
                        resp = await client.post(
                            "/categories/batch-create",
                            json={"categories": [category]},
                        )
                        resp.raise_for_status()
                        created_categories.append(category["name"])
                        continue

                    topics = found.get("topics")
                    if not isinstance(topics, list):
                        topics = []
                    have = {t.get("name") for t in topics if isinstance(t, dict)}
                    missing = [t for t in category["topics"] if t["name"] not in have]
                    if missing:
                        resp = await client.post(
                            f"/categories/{found['category_id']}/topics/batch-create",
                            json={"topics": missing},
                        )
                        resp.raise_for_status()
                        created_topics.extend(t["name"] for t in missing)
        except (httpx.HTTPError, ValueError, AttributeError, KeyError, TypeError) as exc:
            logger.warning("Knowledge taxonomy sync failed: %s", exc)
            return TaxonomySyncResult(
                status="degraded",
                created_categories=created_categories,
                created_topics=created_topics,
                reason=f"{type(exc).__name__}: {exc}",
            )

        if created_categories or created_topics:
            logger.info(
                "Knowledge taxonomy synced: %d categories, %d topics created",
                len(created_categories), len(created_topics),
            )
        return TaxonomySyncResult(created_categories=created_categories, created_topics=created_topics)
