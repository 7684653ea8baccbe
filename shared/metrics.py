"""
Shared metrics configuration for the eligibility engine.
"""

from typing import Dict, Any, Optional

from prometheus_client import Counter, Histogram, Info, CollectorRegistry


class MetricsCollector:
    """Centralized metrics collector for the eligibility engine."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        # Private registry per collector
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up eligibility metrics."""

        # Service info
        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        self._metrics["eligibility_evaluations_total"] = Counter(
            "eligibility_evaluations_total",
            "Total eligibility evaluations",
            ["matched_rule", "eligible"],
            registry=self.registry
        )

        self._metrics["eligibility_evaluation_duration_seconds"] = Histogram(
            "eligibility_evaluation_duration_seconds",
            "Eligibility evaluation duration in seconds",
            registry=self.registry
        )

        # Error metrics
        self._metrics["eligibility_errors_total"] = Counter(
            "eligibility_errors_total",
            "Total eligibility evaluation errors",
            ["error_type"],
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_evaluation(self, matched_rule: str, eligible: bool, duration: float):
        """Record a completed evaluation."""
        self._metrics["eligibility_evaluations_total"].labels(
            matched_rule=matched_rule,
            eligible=str(eligible).lower()
        ).inc()
        self._metrics["eligibility_evaluation_duration_seconds"].observe(duration)

    def record_error(self, error_type: str):
        """Record error metrics."""
        self._metrics["eligibility_errors_total"].labels(error_type=error_type).inc()

    def get_sample_value(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        """Read the current value of a sample from the collector's registry."""
        return self.registry.get_sample_value(name, labels or {})


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
