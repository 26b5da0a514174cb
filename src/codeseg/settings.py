"""
Centralized chunking settings.

Values come from ``CODESEG_*`` environment variables or the ``[chunking]``
section of a TOML file, falling back to the defaults below.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    import tomli as tomllib  # type: ignore[no-redef]

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Token budgets.
DEFAULT_CHUNK_SIZE = 512
MAX_CHUNK_SIZE = 1000
# Minimum trimmed characters for a filler chunk.
MIN_CHUNK_SIZE = 50

MAX_LINES_PER_CHUNK = 200
MIN_LINES_PER_CHUNK = 5


class ChunkerSettings(BaseSettings):
    """Tunable thresholds shared by the assembler and the re-splitter."""

    model_config = SettingsConfigDict(
        env_prefix="CODESEG_",
        extra="ignore",
    )

    min_lines_per_chunk: int = Field(default=MIN_LINES_PER_CHUNK, ge=1)
    min_chunk_chars: int = Field(default=MIN_CHUNK_SIZE, ge=0)
    context_lookback_lines: int = Field(default=3, ge=0)
    chars_per_token: int = Field(default=4, ge=1)
    default_chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1)
    max_chunk_size: int = Field(default=MAX_CHUNK_SIZE, ge=1)
    default_language: str = "typescript"
    log_level: str = "INFO"


_CONFIG_ENV_VAR = "CODESEG_CONFIG_PATH"
_DEFAULT_CONFIG_FILE = Path("codeseg_settings.toml")
_CHUNKING_KEYS = (
    "min_lines_per_chunk",
    "min_chunk_chars",
    "context_lookback_lines",
    "chars_per_token",
    "default_chunk_size",
    "max_chunk_size",
    "default_language",
)


def _load_toml_config() -> Dict[str, Any]:
    """Load configuration from the primary TOML file on disk."""
    candidates: List[Path] = []
    config_override = os.getenv(_CONFIG_ENV_VAR)
    if config_override:
        candidates.append(Path(config_override))
    candidates.append(_DEFAULT_CONFIG_FILE)

    for candidate in candidates:
        if candidate.is_file():
            with candidate.open("rb") as handle:
                return tomllib.load(handle)
    return {}


def _flatten_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Translate grouped TOML sections into ChunkerSettings keyword arguments."""
    data: Dict[str, Any] = {}

    chunking = raw.get("chunking", {})
    for key in _CHUNKING_KEYS:
        if key in chunking:
            data[key] = chunking[key]

    logging_section = raw.get("logging", {})
    if "level" in logging_section:
        data["log_level"] = str(logging_section["level"])

    return data


def load_settings() -> ChunkerSettings:
    raw = _load_toml_config()
    return ChunkerSettings(**_flatten_config(raw))


settings = load_settings()
