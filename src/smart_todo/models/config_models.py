"""Configuration models persisted in config.json."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class AssistantConfig(BaseModel):
    """Assistant API configuration."""

    endpoint: str = Field(default="https://api.anthropic.com")
    model: str = Field(default="claude-sonnet-4-20250514")
    api_version: str = Field(default="2023-06-01")
    max_tokens: int = Field(default=1024, gt=0)
    timeout: float = Field(default=60.0, gt=0)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Strip whitespace and trailing slashes from the endpoint."""
        if not v or not v.strip():
            raise ValueError("endpoint cannot be empty")
        return v.strip().rstrip("/")


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")


class AppConfig(BaseModel):
    """Main smart-todo configuration."""

    database_path: str | None = Field(
        default=None, description="SQLite file; defaults to the user data dir"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    assistant: AssistantConfig = Field(default_factory=AssistantConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
