"""Protean-backed trackable order.

Keeps the tracking flag on a ``CheckoutTracking`` record in the active
tracking domain context, so the flag survives independently of where the
order itself is stored. Order details are kept as plain attributes for the
trackers.
"""

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from tracking.order.checkout_tracking import CheckoutTracking
from tracking.order.port import OrderAlreadyTrackedError, OrderPersistenceError, TrackableOrder

logger = structlog.get_logger(__name__)


class StoredOrder(TrackableOrder):
    def __init__(self, order_id, **details):
        self.order_id = str(order_id)
        for key, value in details.items():
            setattr(self, key, value)
        self._record: CheckoutTracking | None = None

    def _load(self) -> CheckoutTracking:
        if self._record is None:
            repo = current_domain.repository_for(CheckoutTracking)
            try:
                self._record = repo.get(self.order_id)
            except ObjectNotFoundError:
                self._record = CheckoutTracking.for_order(self.order_id)
        return self._record

    def is_tracked(self) -> bool:
        return bool(self._load().tracked)

    def mark_tracked(self) -> None:
        try:
            self._load().mark_tracked()
        except ValidationError as exc:
            raise OrderAlreadyTrackedError(f"Checkout complete already tracked for order {self.order_id}") from exc

    def save(self) -> None:
        try:
            current_domain.repository_for(CheckoutTracking).add(self._load())
        except Exception as exc:
            logger.error(
                "Failed to persist checkout tracking flag",
                order_id=self.order_id,
                error=str(exc),
            )
            raise OrderPersistenceError(f"Failed to persist tracking flag for order {self.order_id}") from exc

    def __repr__(self) -> str:
        return f"StoredOrder(order_id={self.order_id!r})"
