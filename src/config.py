# src/config.py
"""
Configuration loader with validation and safe error handling.

- Reads optional pak.toml (or a provided path).
- Provides defaults if file is absent.
- Exposes a typed configuration object used by the CLI.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from errors import ConfigLoadError
from uti import normalize_uti


class ReaderConfig(BaseModel):
    """How resource content is loaded in the background."""

    max_workers: int = Field(4, ge=1, description="Reader thread pool size")
    chunk_size: int = Field(1024 * 1024, ge=1, description="Read chunk in bytes")


class MimeConfig(BaseModel):
    overrides: Dict[str, str] = Field(
        default_factory=dict,
        description="Extra uniform type identifier → MIME mappings.",
    )

    @field_validator("overrides", mode="after")
    @classmethod
    def _normalize_keys(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Identifiers are matched case-insensitively."""
        return {normalize_uti(k): m.strip() for k, m in v.items() if k.strip()}


class InspectConfig(BaseModel):
    timeout: float = Field(
        30.0, gt=0, description="Seconds to wait for adjusted data in the CLI"
    )


class AppConfig(BaseModel):
    """Root application configuration object."""

    reader: ReaderConfig = ReaderConfig()
    mime: MimeConfig = MimeConfig()
    inspect: InspectConfig = InspectConfig()

    @staticmethod
    def load(path: Optional[Path] = None) -> "AppConfig":
        """
        Load config from TOML if present; otherwise return defaults.

        Load order:
          1) Provided path (if any).
          2) ./pak.toml in the current working directory.
        Env overrides:
          - PAK_READER_WORKERS: overrides reader.max_workers

        Raises:
            ConfigLoadError: if the file cannot be read or validated, or if an
            explicitly provided path does not exist.
        """
        if path is not None and not path.exists():
            raise ConfigLoadError(f"Config file not found: {path}")
        toml_path = path or (Path.cwd() / "pak.toml")

        data: dict = {}
        if toml_path.exists():
            try:
                raw_text = toml_path.read_text(encoding="utf-8")
            except OSError as exc:
                raise ConfigLoadError(
                    f"Failed to read config file: {toml_path}"
                ) from exc
            try:
                data = tomllib.loads(raw_text)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigLoadError(
                    f"Invalid TOML in config file: {toml_path}"
                ) from exc

        workers_env = os.getenv("PAK_READER_WORKERS")
        if workers_env:
            data.setdefault("reader", {})["max_workers"] = workers_env

        try:
            return AppConfig(**data)
        except ValidationError as exc:
            raise ConfigLoadError(
                f"Invalid configuration values in {toml_path}"
            ) from exc
