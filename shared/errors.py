"""
Shared error handling for the eligibility engine.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    evaluation_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class EligibilityError(Exception):
    """Base exception for eligibility evaluation."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self, evaluation_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            evaluation_id=evaluation_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(EligibilityError):
    """Payload is missing or mistypes structurally required fields."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class NoRuleMatchedError(EligibilityError):
    """No rule matched and strict matching is enabled."""

    def __init__(self, message: str = "No eligibility rule matched", details: Optional[Dict[str, Any]] = None):
        super().__init__("NO_RULE_MATCHED", message, details)


class ConfigurationError(EligibilityError):
    """Rule order or reference data is inconsistent."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)
