"""Optional MLflow tracing for the generation pipeline.

Three layers, all no-ops unless ``mlflow-tracing`` is installed and
``MLFLOW_TRACKING_URI`` is set:

1. ``mlflow.gemini.autolog()`` records the structure-planning completion
   as a ``CHAT_MODEL`` span.
2. ``trace()`` wraps MCP tool entrypoints as ``TOOL`` root spans.
3. ``span()``/``annotate()`` mark pipeline decisions inside a request:
   which planning path ran (``ai`` or ``fallback`` and why) and whether the
   knowledge lookup returned context or degraded.

Env vars (all optional):
    MLFLOW_TRACKING_URI: Where to store traces. Empty = tracing disabled.
    MLFLOW_EXPERIMENT_NAME: Experiment name (default ``template-video-mcp``).
    TEMPLATE_VIDEO_TRACING_ENABLED: Set to ``"false"`` to force-disable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

logger = logging.getLogger(__name__)

try:
    import mlflow
    import mlflow.gemini

    _HAS_MLFLOW = True
except ImportError:
    _HAS_MLFLOW = False


def is_enabled() -> bool:
    if not _HAS_MLFLOW:
        return False
    from .config import get_config

    return get_config().tracing_enabled


def trace(
    func: Callable | None = None,
    *,
    name: str | None = None,
    span_type: str | None = None,
    attributes: dict[str, Any] | None = None,
) -> Callable:
    """Decorate a tool entrypoint with ``@mlflow.trace``; identity when tracing is off."""
    if not is_enabled():
        return func if func is not None else (lambda f: f)
    return mlflow.trace(func, name=name, span_type=span_type, attributes=attributes)


@contextmanager
def span(
    name: str,
    span_type: str = "CHAIN",
    attributes: dict[str, Any] | None = None,
) -> Iterator[Any]:
    """Open a child span around one pipeline step.

    Yields the live span, or ``None`` when tracing is off. Pass the yielded
    value to :func:`annotate` to record the step's outcome.
    """
    if not is_enabled():
        yield None
        return
    with mlflow.start_span(name=name, span_type=span_type, attributes=attributes) as live:
        yield live


def annotate(live: Any, **attributes: Any) -> None:
    """Set *attributes* on a span from :func:`span`. No-op for ``None``."""
    if live is None:
        return
    live.set_attributes({k: v for k, v in attributes.items() if v is not None and v != ""})


def setup() -> None:
    """Point MLflow at the configured tracking server and enable Gemini autolog.

    Setup failures are logged; the server starts without tracing.
    """
    if not is_enabled():
        return

    from .config import get_config

    cfg = get_config()
    try:
        mlflow.set_tracking_uri(cfg.mlflow_tracking_uri)
        mlflow.set_experiment(cfg.mlflow_experiment_name)
        mlflow.gemini.autolog()
    except Exception:
        logger.warning("MLflow tracing setup failed, continuing without tracing", exc_info=True)
        return
    logger.info(
        "MLflow tracing enabled (uri=%s, experiment=%s)",
        cfg.mlflow_tracking_uri, cfg.mlflow_experiment_name,
    )


def shutdown() -> None:
    """Flush pending async traces."""
    if not is_enabled():
        return
    try:
        mlflow.flush_trace_async_logging()
    except Exception:
        logger.warning("MLflow trace flush failed", exc_info=True)
