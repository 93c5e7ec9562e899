"""Inbound cross-domain event handler — Tracking reacts to Ordering events.

Listens for OrderCreated and reports checkout complete to the active
trackers. The once-per-order flag on CheckoutTracking means a redelivered
or replayed OrderCreated is not tracked again.
"""

import json

import structlog
from protean.utils.mixins import handle
from shared.events.ordering import OrderCreated

from tracking.domain import tracking
from tracking.order.checkout_tracking import CheckoutTracking
from tracking.order.stored_order import StoredOrder
from tracking.tracker import get_tracking_manager

logger = structlog.get_logger(__name__)

tracking.register_external_event(OrderCreated, "Ordering.OrderCreated.v1")


@tracking.event_handler(part_of=CheckoutTracking, stream_category="ordering::order")
class OrderingTrackingEventHandler:
    """Reports placed orders as completed checkouts."""

    @handle(OrderCreated)
    def on_order_created(self, event: OrderCreated) -> None:
        items = json.loads(event.items) if isinstance(event.items, str) else (event.items or [])
        order = StoredOrder(
            event.order_id,
            customer_id=str(event.customer_id),
            items=items,
            grand_total=event.grand_total,
            currency=event.currency or "USD",
            created_at=event.created_at,
        )

        logger.info(
            "Tracking checkout complete for placed order",
            order_id=order.order_id,
            item_count=len(items),
        )
        get_tracking_manager().track_checkout_complete(order)
