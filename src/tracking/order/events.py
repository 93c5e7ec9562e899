"""Domain events for the CheckoutTracking aggregate."""

from protean.fields import DateTime, Identifier

from tracking.domain import tracking


@tracking.event(part_of="CheckoutTracking")
class CheckoutTracked:
    """Checkout complete was handed to the trackers for an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    tracked_at = DateTime(required=True)
