"""Template orchestrator — prompt in, assembled composition out."""

from __future__ import annotations

import logging
import time

from .assembler import CompositionAssembler
from .catalog import TemplateCatalog, default_catalog
from .config import get_config
from .errors import GENERATION_FAILED_MESSAGE, GenerationError
from .knowledge import KnowledgeClient
from .materializer import SceneMaterializer
from .models.composition import GenerationResult
from .planner import VideoStructurePlanner

logger = logging.getLogger(__name__)


class TemplateOrchestrator:
    """Run planner, materializer and assembler for one request at a time.

    Holds no per-request state, so one instance can serve concurrent calls.
    """

    def __init__(
        self,
        planner: VideoStructurePlanner | None = None,
        catalog: TemplateCatalog | None = None,
        knowledge: KnowledgeClient | None = None,
        sync_taxonomy: bool | None = None,
    ) -> None:
        cfg = get_config()
        self.catalog = catalog or default_catalog()
        if knowledge is None and cfg.knowledge_enabled:
            knowledge = KnowledgeClient.from_config()
        self.knowledge = knowledge
        self.planner = planner or VideoStructurePlanner.from_config(self.catalog, knowledge)
        self.materializer = SceneMaterializer(self.catalog)
        self.assembler = CompositionAssembler(self.catalog, cfg.fps)
        self.sync_taxonomy = cfg.knowledge_sync_taxonomy if sync_taxonomy is None else sync_taxonomy

    async def _sync_taxonomy(self) -> None:
        if not (self.sync_taxonomy and self.knowledge is not None):
            return
        result = await self.knowledge.sync_taxonomy()
        if result.status != "ok":
            logger.warning("Taxonomy sync degraded: %s", result.reason)

    async def generate_template_video(self, prompt: str) -> GenerationResult:
        """Plan, materialize and assemble a video for *prompt*.

        External failures are absorbed upstream. Anything raised here is a
        total synthesis failure and is reported as an unsuccessful result.
        """
        started = time.perf_counter()
        logger.info("Generating template video for prompt (%d chars)", len(prompt))

        await self._sync_taxonomy()

        structure = None
        try:
            structure = await self.planner.plan_template_video(prompt)
            if not structure.scenes:
                raise GenerationError("Structure has no renderable scenes")
            materialized = [
                self.materializer.materialize(scene, scene_name=f"Scene{index}")
                for index, scene in enumerate(structure.scenes, start=1)
            ]
            composition = self.assembler.assemble(structure, materialized)
        except Exception as exc:
            logger.error("Template generation failed: %s", exc, exc_info=True)
            return GenerationResult(
                success=False,
                message=GENERATION_FAILED_MESSAGE,
                duration_ms=int((time.perf_counter() - started) * 1000),
                structure=structure,
            )

        elapsed = int((time.perf_counter() - started) * 1000)
        logger.info("Generated %d-scene video in %d ms", len(materialized), elapsed)
        return GenerationResult(
            success=True,
            message=f"Generated {len(materialized)}-scene template video",
            duration_ms=elapsed,
            structure=structure,
            composition=composition,
        )
