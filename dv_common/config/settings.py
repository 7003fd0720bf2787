"""Viewer settings loaded from YAML and environment overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from dv_common.errors import ConfigurationError

logger = logging.getLogger(__name__)

CLASS_SECTIONS = ("annotations", "name", "details", "fields", "methods")
DEFAULT_CLASS_SECTIONS = ["annotations", "name", "details", "fields"]
TRUTHY = frozenset({"1", "true", "yes", "on"})


class ViewerSettings(BaseModel):
    """User-tunable viewer preferences."""

    default_language: str = Field(
        default="Java",
        min_length=1,
        description="Output language selected when a file is opened",
    )
    class_options: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CLASS_SECTIONS),
        description="Class sections rendered when a class node is selected",
    )
    font_family: str = Field(default="Menlo", description="Code view font family")
    font_size: int = Field(default=12, ge=6, le=72, description="Code view font size")
    theme: Optional[str] = Field(
        default=None,
        description="GUI theme name; falls back to the saved preference",
    )
    parser: Optional[str] = Field(
        default=None,
        description="Entry-point name of the bytecode parser; first available if unset",
    )

    model_config = {
        "extra": "ignore",
    }

    @field_validator("class_options")
    @classmethod
    def _check_sections(cls, value: List[str]) -> List[str]:
        unknown = [item for item in value if item not in CLASS_SECTIONS]
        if unknown:
            raise ValueError(
                f"Unknown class sections: {', '.join(unknown)} "
                f"(expected any of {', '.join(CLASS_SECTIONS)})"
            )
        return value


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(
            f"Settings file not found: {path}", context={"path": path}
        )
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Invalid YAML in {path}", context={"path": path}, cause=exc
            ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Settings file must contain a mapping: {path}", context={"path": path}
        )
    # Settings may be nested under a "viewer" section or sit at the top level.
    section = data.get("viewer", data)
    return dict(section) if isinstance(section, dict) else {}


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    language = os.environ.get("DV_DEFAULT_LANGUAGE")
    if language:
        overrides["default_language"] = language
    # Raw text; ViewerSettings rejects values that are not integers.
    font_size = os.environ.get("DV_FONT_SIZE", "").strip()
    if font_size:
        overrides["font_size"] = font_size
    theme = os.environ.get("DV_THEME")
    if theme:
        overrides["theme"] = theme
    parser = os.environ.get("DV_PARSER")
    if parser:
        overrides["parser"] = parser
    return overrides


def load_settings(path: Path | None = None) -> ViewerSettings:
    """Load settings from ``path`` (or ``DV_CONFIG``) and apply env overrides.

    Environment variables win over file values. Missing files named
    explicitly are an error; without any file the defaults are used.
    """
    if path is None:
        env_path = os.environ.get("DV_CONFIG")
        path = Path(env_path).expanduser() if env_path else None

    data: dict[str, Any] = {}
    if path is not None:
        data = _read_yaml(path)
        logger.debug("Loaded viewer settings from %s", path)
    data.update(_env_overrides())

    try:
        return ViewerSettings(**data)
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid viewer settings", context={"path": path}, cause=exc
        ) from exc


class LoggingSettings(BaseModel):
    """Log output options taken from ``DV_LOG_LEVEL``, ``DV_LOG_JSON`` and ``DV_LOG_FILE``."""

    level: Optional[str] = Field(default=None, description="Level name or number")
    json_output: bool = Field(default=False, description="Render records as JSON lines")
    file: Optional[Path] = Field(default=None, description="Extra log file")

    @field_validator("level", mode="before")
    @classmethod
    def _blank_level(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("json_output", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> Any:
        if value is None:
            return False
        if isinstance(value, str):
            return value.strip().lower() in TRUTHY
        return value

    @field_validator("file", mode="before")
    @classmethod
    def _blank_file(cls, value: Any) -> Any:
        return value or None


def load_logging_settings() -> LoggingSettings:
    """Read the ``DV_LOG_*`` variables; unknown flag values count as off."""
    return LoggingSettings(
        level=os.environ.get("DV_LOG_LEVEL"),
        json_output=os.environ.get("DV_LOG_JSON"),
        file=os.environ.get("DV_LOG_FILE"),
    )
