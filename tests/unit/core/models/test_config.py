"""Tests for EmitterConfig."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from asyncemit.core.events.emitter import AsyncEventEmitter
from asyncemit.core.models.config import EmitterConfig


class TestEmitterConfig:
    """Tests for EmitterConfig loading."""

    def test_defaults(self):
        """Test default values."""
        config = EmitterConfig()
        assert config.max_listeners == 0
        assert config.log_listener_errors is True

    def test_negative_max_listeners_rejected(self):
        """Test validation of max_listeners."""
        with pytest.raises(ValidationError):
            EmitterConfig(max_listeners=-1)

    def test_env_override(self, monkeypatch):
        """Test ASYNCEMIT_ environment variables."""
        monkeypatch.setenv("ASYNCEMIT_MAX_LISTENERS", "25")
        monkeypatch.setenv("ASYNCEMIT_LOG_LISTENER_ERRORS", "false")
        config = EmitterConfig()
        assert config.max_listeners == 25
        assert config.log_listener_errors is False

    def test_from_dict_and_to_dict(self):
        """Test dictionary conversion."""
        config = EmitterConfig.from_dict({"max_listeners": 5})
        assert config.to_dict() == {"max_listeners": 5, "log_listener_errors": True}

    def test_from_yaml(self, tmp_path):
        """Test loading from a YAML file."""
        path = tmp_path / "emitter.yaml"
        path.write_text("max_listeners: 10\nlog_listener_errors: false\n")
        config = EmitterConfig.from_yaml(path)
        assert config.max_listeners == 10
        assert config.log_listener_errors is False

    def test_from_empty_yaml(self, tmp_path):
        """Test that an empty file gives defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert EmitterConfig.from_yaml(path) == EmitterConfig()

    def test_from_missing_yaml(self, tmp_path):
        """Test missing file error."""
        with pytest.raises(FileNotFoundError):
            EmitterConfig.from_yaml(tmp_path / "missing.yaml")

    def test_emitter_uses_default_config(self):
        """Test emitter falls back to defaults."""
        assert AsyncEventEmitter().config == EmitterConfig()
