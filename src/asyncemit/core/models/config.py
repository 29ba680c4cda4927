"""Configuration models using Pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmitterConfig(BaseSettings):
    """Emitter configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ASYNCEMIT_",
        extra="ignore",
    )

    max_listeners: int = Field(default=0, ge=0)  # 0 = no limit
    log_listener_errors: bool = True

    @classmethod
    def from_yaml(cls, path: Path | str) -> EmitterConfig:
        """Load configuration from YAML file."""
        import yaml

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open() as f:
            data = yaml.safe_load(f)

        return cls(**data) if data else cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EmitterConfig:
        """Create configuration from dictionary."""
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return self.model_dump()
