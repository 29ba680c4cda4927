"""Configuration models."""

from asyncemit.core.models.config import EmitterConfig

__all__ = ["EmitterConfig"]
