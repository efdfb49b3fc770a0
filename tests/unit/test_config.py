"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from rolegate.config import Settings


pytestmark = pytest.mark.unit


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, settings: Settings):
        assert settings.max_hierarchy_depth == 64
        assert settings.owner_source == "acting_role"
        assert settings.bootstrap_path is None
        assert settings.database_url is None
        assert settings.is_production is False

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ROLEGATE_MAX_HIERARCHY_DEPTH", "8")
        monkeypatch.setenv("ROLEGATE_OWNER_SOURCE", "draft")
        monkeypatch.setenv("ROLEGATE_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.max_hierarchy_depth == 8
        assert settings.owner_source == "draft"
        assert settings.log_level == "DEBUG"

    def test_depth_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_hierarchy_depth=0)  # type: ignore[call-arg]

    def test_unknown_owner_source_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, owner_source="owner")  # type: ignore[call-arg]
