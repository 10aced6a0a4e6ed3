"""Prometheus metrics exposed by the mailer."""

from prometheus_client import Counter, CollectorRegistry, generate_latest


class MailMetrics:
    """Wrapper around the Prometheus registry used by the mailer."""

    def __init__(self, registry: CollectorRegistry | None = None):
        """Create counters inside the provided registry."""
        self.registry = registry or CollectorRegistry()
        self.sent = Counter("rmail_sent_total", "Total raw messages handed to the transport", registry=self.registry)
        self.suppressed = Counter(
            "rmail_suppressed_total", "Total sends suppressed by the dispatch mode", ["reason"], registry=self.registry
        )
        self.errors = Counter("rmail_errors_total", "Total assembly or transport failures", registry=self.registry)

    def inc_sent(self):
        """Increase the ``sent`` counter."""
        self.sent.inc()

    def inc_suppressed(self, reason: str):
        """Increase the ``suppressed`` counter for the given reason."""
        self.suppressed.labels(reason=reason or "unknown").inc()

    def inc_error(self):
        """Increase the ``errors`` counter."""
        self.errors.inc()

    def generate_latest(self) -> bytes:
        """Return the latest metrics snapshot in Prometheus text format."""
        return generate_latest(self.registry)
