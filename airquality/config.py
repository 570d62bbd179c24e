from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoaderConfig(BaseModel):
    """Layout of the delimited readings export."""

    header_lines: int = Field(4, description="Lines skipped before the first reading")
    delimiter: str = Field(",", description="Single-character field separator")
    value_column: int = Field(4, description="0-based index of the reading column")
    missing_token: str = Field("-", description="Field value meaning 'no reading'")
    encoding: str = "utf-8"
    skip_malformed: bool = Field(
        False, description="Log and skip unparsable readings instead of failing"
    )

    @field_validator("delimiter")
    @classmethod
    def _one_char(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("delimiter must be a single character")
        return v

    @field_validator("header_lines", "value_column")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be >= 0")
        return v


class AnalysisConfig(BaseModel):
    critical_threshold: int = Field(20, description="Readings > this are critical")
    min_ceiling: float = Field(
        30.0, description="Starting value of the running minimum (expected max plausible reading)"
    )
    max_floor: float = Field(0.0, description="Starting value of the running maximum")
    true_extrema: bool = Field(
        False, description="Report true min/max instead of the ceiling/floor scan"
    )
    initial_capacity: int = Field(0, ge=0, description="Capacity hint for the readings buffer")


class RuntimeConfig(BaseModel):
    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"
    DATA_FILE: Optional[str] = None


class AppConfig(BaseModel):
    env: EnvSettings
    runtime: RuntimeConfig

    # Allow tests to pass a plain dict for env
    @field_validator("env", mode="before")
    @classmethod
    def _coerce_env(cls, v):  # type: ignore[no-untyped-def]
        if isinstance(v, dict):
            return EnvSettings(**v)
        return v

    @staticmethod
    def load(config_path: Optional[Path] = None) -> "AppConfig":
        env = EnvSettings()  # loads from environment and .env

        runtime = RuntimeConfig()
        if config_path is None:
            default_path = Path("config.yaml")
            config_path = default_path if default_path.exists() else None
        elif not Path(config_path).exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        if config_path:
            with open(config_path, "r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
            try:
                runtime = RuntimeConfig(**raw)
            except (ValidationError, TypeError) as ve:
                raise ValueError(f"Invalid config {config_path}: {ve}")

        return AppConfig(env=env, runtime=runtime)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load merged configuration from environment and optional YAML."""

    return AppConfig.load(config_path)
