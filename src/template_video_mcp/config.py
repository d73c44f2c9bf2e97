"""Server configuration via environment variables."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

VALID_THINKING_LEVELS = {"minimal", "low", "medium", "high"}

DEFAULT_KNOWLEDGE_URL = "https://sdk.senso.ai/api/v1"

# One key file read by every MCP host that launches this server.
DOTENV_PATH = Path.home() / ".config" / "template-video-mcp" / ".env"
DOTENV_KEYS = ("GEMINI_API_KEY", "KNOWLEDGE_API_KEY")

logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool:
    """Return True when env var *name* holds a truthy flag value."""
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes")


def _resolve_tracing_enabled(flag_value: str, tracking_uri: str) -> bool:
    """Derive tracing_enabled from env vars.

    - ``TEMPLATE_VIDEO_TRACING_ENABLED=false`` → always disabled (explicit opt-out).
    - Otherwise enabled when ``MLFLOW_TRACKING_URI`` is non-empty.
    """
    if flag_value.lower() == "false":
        return False
    return bool(tracking_uri)


def load_dotenv_keys(path: Path | None = None) -> list[str]:
    """Copy API keys from the shared ``.env`` file into ``os.environ``.

    Only :data:`DOTENV_KEYS` are read, and only when the process environment
    leaves them blank. ``export`` prefixes and quotes are accepted.

    Returns:
        Names of the keys that were injected.
    """
    path = path or DOTENV_PATH
    if not path.is_file():
        return []

    injected: list[str] = []
    for line in path.read_text().splitlines():
        key, sep, value = line.strip().removeprefix("export ").partition("=")
        key = key.strip()
        if not sep or key not in DOTENV_KEYS or os.getenv(key, "").strip():
            continue
        os.environ[key] = value.strip().strip("'\"")
        injected.append(key)
    return injected


class ServerConfig(BaseModel):
    """Runtime configuration resolved from environment."""

    gemini_api_key: str = Field(default="")
    default_model: str = Field(default="gemini-3-flash-preview")
    default_thinking_level: str = Field(default="low")
    planner_temperature: float = Field(default=0.3)
    planner_max_tokens: int = Field(default=2000)
    knowledge_api_url: str = Field(default=DEFAULT_KNOWLEDGE_URL)
    knowledge_api_key: str = Field(default="")
    knowledge_enabled: bool = Field(default=False)
    knowledge_timeout: float = Field(default=10.0)
    knowledge_max_results: int = Field(default=2)
    knowledge_sync_taxonomy: bool = Field(default=False)
    duration_budget_frames: int = Field(default=900)
    fps: int = Field(default=30)
    target_scene_count: int = Field(default=5)
    tracing_enabled: bool = Field(default=False)
    mlflow_tracking_uri: str = Field(default="")
    mlflow_experiment_name: str = Field(default="template-video-mcp")

    @field_validator("default_thinking_level")
    @classmethod
    def validate_thinking_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in VALID_THINKING_LEVELS:
            allowed = ", ".join(sorted(VALID_THINKING_LEVELS))
            raise ValueError(f"Invalid thinking level '{value}'. Allowed: {allowed}")
        return level

    @field_validator(
        "planner_max_tokens",
        "knowledge_max_results",
        "duration_budget_frames",
        "fps",
        "target_scene_count",
    )
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Configuration values must be >= 1")
        return value

    @field_validator("knowledge_timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("knowledge_timeout must be > 0")
        return value

    @field_validator("planner_temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        if value < 0:
            raise ValueError("planner_temperature must be >= 0")
        return value

    @field_validator("knowledge_api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/") or DEFAULT_KNOWLEDGE_URL

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build config from environment variables."""
        knowledge_key = os.getenv("KNOWLEDGE_API_KEY", "") or os.getenv("SENSO_API_KEY", "")
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            default_model=os.getenv("GEMINI_MODEL", "gemini-3-flash-preview"),
            default_thinking_level=os.getenv("GEMINI_THINKING_LEVEL", "low"),
            planner_temperature=float(os.getenv("PLANNER_TEMPERATURE", "0.3")),
            planner_max_tokens=int(os.getenv("PLANNER_MAX_TOKENS", "2000")),
            knowledge_api_url=os.getenv("KNOWLEDGE_API_URL", DEFAULT_KNOWLEDGE_URL),
            knowledge_api_key=knowledge_key,
            knowledge_enabled=bool(knowledge_key),
            knowledge_timeout=float(os.getenv("KNOWLEDGE_TIMEOUT", "10")),
            knowledge_max_results=int(os.getenv("KNOWLEDGE_MAX_RESULTS", "2")),
            knowledge_sync_taxonomy=_env_flag("KNOWLEDGE_SYNC_TAXONOMY"),
            duration_budget_frames=int(os.getenv("VIDEO_DURATION_BUDGET", "900")),
            fps=int(os.getenv("VIDEO_FPS", "30")),
            target_scene_count=int(os.getenv("VIDEO_TARGET_SCENES", "5")),
            tracing_enabled=_resolve_tracing_enabled(
                os.getenv("TEMPLATE_VIDEO_TRACING_ENABLED", ""),
                os.getenv("MLFLOW_TRACKING_URI", ""),
            ),
            mlflow_tracking_uri=os.getenv("MLFLOW_TRACKING_URI", ""),
            mlflow_experiment_name=os.getenv("MLFLOW_EXPERIMENT_NAME", "template-video-mcp"),
        )


# Singleton, initialised on first access.
_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Return the global config singleton, creating it on first access.

    API keys missing from the environment are read from ``DOTENV_PATH``
    first. Process environment always wins over the file.
    """
    global _config
    if _config is None:
        injected = load_dotenv_keys()
        if injected:
            logger.info("Loaded %s from %s", ", ".join(injected), DOTENV_PATH)
        _config = ServerConfig.from_env()
    return _config


def update_config(**overrides: object) -> ServerConfig:
    """Patch the live config, ignoring ``None`` overrides."""
    global _config
    cfg = get_config()
    data = cfg.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    _config = ServerConfig(**data)
    return _config


def reset_config() -> None:
    """Reset the config singleton (for testing)."""
    global _config
    _config = None
