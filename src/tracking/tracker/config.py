"""Which trackers run, and for which tenants.

Read from environment variables:

    TRACKING_TRACKERS                      comma list of tracker names (default "logging")
    TRACKING_<NAME>_ASSORTMENT_TENANTS     comma list scoping that tracker's assortment axis
    TRACKING_<NAME>_CHECKOUT_TENANTS       comma list scoping that tracker's checkout axis
    TRACKING_ISOLATE_FAILURES              "1", "true", "yes" or "on" to isolate tracker failures
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from tracking.tracker.capabilities import Tracker
from tracking.tracker.exceptions import TrackerConfigurationError

_TRUTHY = {"1", "true", "yes", "on"}


def _split(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class TrackerSettings:
    name: str
    assortment_tenants: tuple[str, ...] = ()
    checkout_tenants: tuple[str, ...] = ()


@dataclass(frozen=True)
class TrackingSettings:
    trackers: tuple[TrackerSettings, ...] = field(default_factory=lambda: (TrackerSettings("logging"),))
    isolate_failures: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TrackingSettings":
        environ = os.environ if environ is None else environ

        names = _split(environ.get("TRACKING_TRACKERS", "logging"))
        trackers = tuple(
            TrackerSettings(
                name=name,
                assortment_tenants=_split(environ.get(f"TRACKING_{name.upper()}_ASSORTMENT_TENANTS")),
                checkout_tenants=_split(environ.get(f"TRACKING_{name.upper()}_CHECKOUT_TENANTS")),
            )
            for name in names
        )
        isolate = environ.get("TRACKING_ISOLATE_FAILURES", "").strip().lower() in _TRUTHY
        return cls(trackers=trackers, isolate_failures=isolate)


def build_tracker(settings: TrackerSettings) -> Tracker:
    """Instantiate a shipped tracker by name."""
    name = settings.name.lower()
    if name == "logging":
        from tracking.tracker.logging_tracker import LoggingTracker

        return LoggingTracker(settings.assortment_tenants, settings.checkout_tenants)
    if name == "recording":
        from tracking.tracker.fake_tracker import RecordingTracker

        return RecordingTracker(settings.assortment_tenants, settings.checkout_tenants)
    raise TrackerConfigurationError(f"Unknown tracker: {settings.name}")
