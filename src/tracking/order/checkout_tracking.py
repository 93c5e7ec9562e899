"""CheckoutTracking aggregate (CQRS) — once-per-order record of checkout-complete tracking.

One record per order, keyed by the order id. The ``tracked`` flag is
write-once: it moves from untracked to tracked and never back, which is what
makes checkout-complete tracking at-most-once per order.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier

from tracking.domain import tracking
from tracking.order.events import CheckoutTracked


@tracking.aggregate
class CheckoutTracking:
    order_id = Identifier(identifier=True, required=True)
    tracked = Boolean(default=False)
    tracked_at = DateTime()

    @invariant.post
    def tracked_orders_must_have_a_timestamp(self):
        if self.tracked and self.tracked_at is None:
            raise ValidationError({"tracked_at": ["Tracked orders must record when they were tracked"]})

    @classmethod
    def for_order(cls, order_id):
        return cls(order_id=order_id, tracked=False)

    def mark_tracked(self):
        if self.tracked:
            raise ValidationError({"tracked": ["Checkout complete already tracked for this order"]})

        now = datetime.now(UTC)
        self.tracked_at = now
        self.tracked = True

        self.raise_(
            CheckoutTracked(
                order_id=str(self.order_id),
                tracked_at=now,
            )
        )
