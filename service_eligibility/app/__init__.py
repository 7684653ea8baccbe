"""
Eligibility service package.

Evaluates whether a financial transaction is eligible for regulatory
reporting. It provides:

- app.service: EligibilityService, the boundary that validates payloads,
  runs the rule engine, records metrics and writes the audit log entry.
- app.rules: Rule model, reference data, fact derivation and the engine.

Guidelines:
- Evaluation is a pure function of the payload and the static rule set.
- Keep rule evaluation deterministic and observable (metrics + logs).
"""

from .service import EligibilityService

__all__ = ["EligibilityService"]
