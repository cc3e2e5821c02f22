"""Top-level package for the disruption-alerts project.

This package exposes the public run() helper so callers can do
`python -m disruption_alerts` or `from disruption_alerts import run; run()`.
"""

from importlib import metadata as _metadata

try:
    __version__: str = _metadata.version("disruption-alerts")
except _metadata.PackageNotFoundError:  # pragma: no cover – running from source
    __version__ = "0.0.0"

from .workflows.alert_pipeline import AlertLifecycleOrchestrator, run  # convenience re-export

__all__ = ["AlertLifecycleOrchestrator", "run", "__version__"]
