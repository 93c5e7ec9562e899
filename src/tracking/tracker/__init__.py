"""Tracking manager factory.

Provides get_tracking_manager() / set_tracking_manager() to share one
manager per process. The default manager is built from the TRACKING_*
environment variables and reads tenants from a context-variable backed
environment, so request handlers set tenants with ``tenant_scope``.
"""

from tracking.environment.environment import ContextEnvironment
from tracking.tracker.config import TrackingSettings, build_tracker
from tracking.tracker.manager import TrackingManager

_environment = ContextEnvironment()
_current_manager: TrackingManager | None = None


def get_environment() -> ContextEnvironment:
    """Return the process-wide tenant environment used by the default manager."""
    return _environment


def build_tracking_manager(settings: TrackingSettings | None = None, environment=None) -> TrackingManager:
    settings = settings or TrackingSettings.from_env()
    return TrackingManager(
        trackers=[build_tracker(tracker_settings) for tracker_settings in settings.trackers],
        environment=environment or _environment,
        isolate_failures=settings.isolate_failures,
    )


def get_tracking_manager() -> TrackingManager:
    """Return the current tracking manager, building it from the environment on first use."""
    global _current_manager
    if _current_manager is None:
        _current_manager = build_tracking_manager()
    return _current_manager


def set_tracking_manager(manager: TrackingManager) -> None:
    """Override the active tracking manager (useful for tests)."""
    global _current_manager
    _current_manager = manager


def reset_tracking_manager() -> None:
    """Reset to the environment-configured manager on next access."""
    global _current_manager
    _current_manager = None
