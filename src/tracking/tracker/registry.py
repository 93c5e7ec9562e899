"""Ordered collection of registered tracking backends."""

from tracking.tracker.capabilities import Tracker
from tracking.tracker.exceptions import TrackerConfigurationError


class TrackerRegistry:
    """Registration order is dispatch order. Duplicates are kept; nothing is ever removed."""

    def __init__(self):
        self._trackers: list[Tracker] = []

    def register(self, tracker: Tracker) -> None:
        if not isinstance(tracker, Tracker):
            raise TrackerConfigurationError(f"Cannot register {tracker!r}: trackers must subclass Tracker")
        self._trackers.append(tracker)

    def list(self) -> tuple[Tracker, ...]:
        """All registered trackers, including those inactive for the current tenants."""
        return tuple(self._trackers)

    def __iter__(self):
        return iter(tuple(self._trackers))

    def __len__(self) -> int:
        return len(self._trackers)
