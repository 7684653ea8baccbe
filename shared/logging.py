"""
Shared logging configuration for the eligibility engine.
"""

import sys
import structlog
import logging
import uuid
import time
from typing import Any, Dict, Optional
from contextvars import ContextVar

# Context variables for correlation IDs
evaluation_id_var: ContextVar[Optional[str]] = ContextVar('evaluation_id', default=None)
party_var: ContextVar[Optional[str]] = ContextVar('party', default=None)


def configure_logging(service_name: str, log_level: str = "info") -> None:
    """Configure structured logging for a service."""

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_service_context,
            add_correlation_context,
            add_timestamp,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    get_logger(f"{service_name}.logging").debug("Logging configured", log_level=log_level)


def add_service_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add service context to log events."""
    # Extract service name from logger name
    logger_name = event_dict.get("logger", "")
    if "." in logger_name:
        service_name = logger_name.split(".")[0]
        event_dict["service"] = service_name

    return event_dict


def add_correlation_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add correlation context to log events."""
    evaluation_id = evaluation_id_var.get()
    if evaluation_id:
        event_dict["evaluation_id"] = evaluation_id

    party = party_var.get()
    if party:
        event_dict["party"] = party

    return event_dict


def add_timestamp(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add high-precision timestamp to log events."""
    event_dict["timestamp"] = time.time()
    return event_dict


def set_evaluation_id(evaluation_id: Optional[str] = None) -> str:
    """Set evaluation ID in context."""
    if evaluation_id is None:
        evaluation_id = str(uuid.uuid4())
    evaluation_id_var.set(evaluation_id)
    return evaluation_id


def set_party_context(party: Optional[str] = None):
    """Set the transacting party in logging context."""
    if party:
        party_var.set(party)


def clear_context():
    """Clear all context variables."""
    evaluation_id_var.set(None)
    party_var.set(None)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
