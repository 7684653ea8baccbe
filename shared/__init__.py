"""
Shared utilities for the eligibility engine.

This package aggregates common building blocks:

- config: Settings via pydantic-settings
- logging: Structured logging with evaluation correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Do not import from service_eligibility into shared/.
"""
