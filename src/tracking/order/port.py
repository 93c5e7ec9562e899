"""Trackable order port — the order contract checkout-complete relies on.

The tracking domain never owns orders. It only needs to know whether
checkout-complete was already tracked for an order, to flip that flag once,
and to have the flag durably saved before any tracker is called.
"""

from abc import ABC, abstractmethod

from tracking.exceptions import TrackingError


class OrderPersistenceError(TrackingError):
    """The order's tracking flag could not be saved."""


class OrderAlreadyTrackedError(TrackingError):
    """The tracking flag is write-once and was already set."""


class TrackableOrder(ABC):
    """Abstract interface for orders passed to checkout-complete tracking."""

    @abstractmethod
    def is_tracked(self) -> bool:
        """Whether checkout-complete was already tracked for this order."""
        ...

    @abstractmethod
    def mark_tracked(self) -> None:
        """Set the tracking flag.

        Raises:
            OrderAlreadyTrackedError: if the flag is already set.
        """
        ...

    @abstractmethod
    def save(self) -> None:
        """Persist the flag.

        Raises:
            OrderPersistenceError: if the flag could not be stored.
        """
        ...
