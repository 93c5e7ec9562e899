"""Cross-domain event contracts for Ordering events consumed by Tracking.

The Tracking domain registers these as external events via
domain.register_external_event() with the same __type__ string the Ordering
domain publishes under, so Protean can deserialize them from the
``ordering::order`` stream.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Float, Identifier, String, Text


class OrderCreated(BaseEvent):
    """An order was placed from a shopping cart at checkout.

    Tracking treats this as checkout complete for the order.
    """

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON list of item dicts
    grand_total = Float(required=True)
    currency = String(default="USD")
    created_at = DateTime(required=True)
