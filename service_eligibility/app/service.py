"""
Eligibility service: the boundary between raw payloads and the rule engine.
"""

import json
import time
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from shared.config import EligibilitySettings, get_settings
from shared.errors import EligibilityError, ValidationError
from shared.logging import get_logger, set_evaluation_id, set_party_context, clear_context
from shared.metrics import MetricsCollector, get_metrics_collector

from .rules.context import build_context
from .rules.definitions import build_rules
from .rules.engine import RuleEngine
from .rules.models import EligibilityRequest, EligibilityResult
from .rules.reference import ReferenceData


class EligibilityService:
    """Eligibility service implementation."""

    def __init__(
        self,
        settings: Optional[EligibilitySettings] = None,
        reference_data: Optional[ReferenceData] = None,
        metrics: Optional[MetricsCollector] = None
    ):
        self.settings = settings or get_settings()
        self.logger = get_logger("eligibility.service")

        # Initialize components
        self.reference_data = reference_data or ReferenceData.from_settings(self.settings)
        self.rule_engine = RuleEngine(
            build_rules(self.reference_data),
            strict_matching=self.settings.strict_matching
        )
        self.metrics = metrics or get_metrics_collector(self.settings.service_name)

    def parse_request(self, payload: Any) -> EligibilityRequest:
        """Validate a raw payload into a typed request."""
        if not isinstance(payload, Mapping):
            raise ValidationError(
                "Payload must be a JSON object",
                {"type": type(payload).__name__}
            )

        try:
            return EligibilityRequest.model_validate(dict(payload))
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid eligibility payload",
                {
                    "errors": [
                        {
                            "field": ".".join(str(part) for part in error["loc"]),
                            "message": error["msg"]
                        }
                        for error in e.errors()
                    ]
                }
            ) from e

    def evaluate(self, payload: Mapping[str, Any]) -> EligibilityResult:
        """Evaluate a request payload and return the eligibility verdict."""
        start_time = time.time()
        set_evaluation_id()

        try:
            request = self.parse_request(payload)
            set_party_context(request.party)

            context = build_context(request, self.reference_data)
            result = self.rule_engine.evaluate(context)

            duration = time.time() - start_time
            self.metrics.record_evaluation(result.matched_rule, result.eligible, duration)
            self.logger.info(
                "eligibility_evaluated",
                result=result.to_dict(),
                evaluation_ms=duration * 1000
            )
            return result

        except EligibilityError as e:
            self.metrics.record_error(e.code)
            self.logger.warning(
                "Eligibility evaluation failed",
                code=e.code,
                error=e.message,
                details=e.details
            )
            raise

        finally:
            clear_context()

    def evaluate_json(self, document: Union[str, bytes]) -> EligibilityResult:
        """Parse a JSON document (text or UTF-8 bytes) and evaluate it."""
        try:
            if isinstance(document, bytes):
                document = document.decode("utf-8")
            payload = json.loads(document)
        except UnicodeDecodeError as e:
            error = ValidationError(
                "Payload is not valid UTF-8",
                {"error": e.reason, "position": e.start}
            )
            self.metrics.record_error(error.code)
            raise error from e
        except json.JSONDecodeError as e:
            error = ValidationError(
                "Payload is not valid JSON",
                {"error": e.msg, "line": e.lineno, "column": e.colno}
            )
            self.metrics.record_error(error.code)
            raise error from e

        return self.evaluate(payload)
