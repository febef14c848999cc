"""Prometheus metrics for script imports, budget submissions and notifications"""

import logging
from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


# Script import metrics
script_imports_total = Counter(
    'script_imports_total',
    'Total number of script import attempts',
    ['status']
)

scenes_imported_total = Counter(
    'scenes_imported_total',
    'Total number of scenes created by script imports'
)

script_analysis_duration_seconds = Histogram(
    'script_analysis_duration_seconds',
    'Time spent waiting on the hosted model for a script breakdown',
    ['status'],
    buckets=[1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0, 120.0]
)

# Budget metrics
budget_submissions_total = Counter(
    'budget_submissions_total',
    'Total number of budget submissions',
    ['kind', 'department']
)

# Notification metrics
notifications_sent_total = Counter(
    'notifications_sent_total',
    'Total number of notifications created',
    ['type']
)

notification_push_failures_total = Counter(
    'notification_push_failures_total',
    'Websocket pushes that could not be delivered'
)


class MetricsCollector:
    """Thin facade so services record metrics without touching label plumbing"""

    def record_script_import(self, status: str, scene_count: int = 0):
        """Record a script import outcome"""
        script_imports_total.labels(status=status).inc()
        if scene_count:
            scenes_imported_total.inc(scene_count)

    def record_script_analysis(self, status: str, duration_seconds: float):
        """Record one call to the hosted model"""
        script_analysis_duration_seconds.labels(status=status).observe(duration_seconds)

    def record_budget_submission(self, kind: str, department: str):
        """Record an estimate or actual-cost save"""
        budget_submissions_total.labels(kind=kind, department=department).inc()

    def record_notification(self, notification_type: str):
        notifications_sent_total.labels(type=notification_type).inc()

    def record_push_failure(self):
        notification_push_failures_total.inc()


# Global metrics collector instance
metrics_collector = MetricsCollector()
