"""End-to-end workflows built from the service layer."""

from .alert_pipeline import AlertLifecycleOrchestrator, run  # noqa: F401

__all__ = ["AlertLifecycleOrchestrator", "run"]
