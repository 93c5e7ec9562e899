"""Tracker registration and dispatch errors."""

from tracking.exceptions import TrackingError


class TrackerConfigurationError(TrackingError, ValueError):
    """A tracker could not be registered or built from configuration."""


class TrackerDispatchError(TrackingError):
    """One or more trackers failed during an isolated fan-out.

    Raised after every active tracker had its turn. ``failures`` holds
    ``(tracker, exception)`` pairs in dispatch order.
    """

    def __init__(self, event: str, failures: list[tuple[object, Exception]]):
        self.event = event
        self.failures = failures
        names = ", ".join(type(tracker).__name__ for tracker, _ in failures)
        super().__init__(f"{len(failures)} tracker(s) failed on {event}: {names}")
