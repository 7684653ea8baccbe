"""
Tests for the shared configuration, logging and error helpers.
"""

from shared.config import get_settings
from shared.errors import EligibilityError, ValidationError
from shared.logging import (
    add_correlation_context, add_service_context,
    set_evaluation_id, set_party_context, clear_context
)


class TestSettings:
    """Test cases for EligibilitySettings."""

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("ELIGIBILITY_MAS_ENTITIES", raising=False)

        settings = get_settings()

        assert settings.service_name == "eligibility"
        assert settings.strict_matching is False
        assert settings.reference_data_file is None
        assert "Y" not in settings.mas_entities

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ELIGIBILITY_STRICT_MATCHING", "true")
        monkeypatch.setenv("ELIGIBILITY_MAS_ENTITIES", '["Alpha", "Beta"]')

        settings = get_settings()

        assert settings.strict_matching is True
        assert settings.mas_entities == ["Alpha", "Beta"]

    def test_explicit_overrides_win(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ELIGIBILITY_LOG_LEVEL", "debug")

        assert get_settings(log_level="error").log_level == "error"


class TestLoggingContext:
    """Test cases for log event processors."""

    def test_correlation_context(self):
        evaluation_id = set_evaluation_id()
        set_party_context("Y")
        try:
            event = add_correlation_context(None, "info", {"event": "eligibility_evaluated"})
        finally:
            clear_context()

        assert event["evaluation_id"] == evaluation_id
        assert event["party"] == "Y"

    def test_cleared_context(self):
        set_evaluation_id("eval-1")
        clear_context()

        event = add_correlation_context(None, "info", {"event": "x"})

        assert "evaluation_id" not in event
        assert "party" not in event

    def test_service_context(self):
        event = add_service_context(None, "info", {"logger": "eligibility.rule_engine"})

        assert event["service"] == "eligibility"


class TestErrors:
    """Test cases for error types."""

    def test_error_response(self):
        error = EligibilityError("CUSTOM", "Something broke", {"field": "party"})

        response = error.to_response()

        assert response.code == "CUSTOM"
        assert response.message == "Something broke"
        assert response.details == {"field": "party"}
        assert response.evaluation_id is None

    def test_validation_error_defaults(self):
        error = ValidationError()

        assert str(error) == "Validation failed"
        assert error.details == {}
