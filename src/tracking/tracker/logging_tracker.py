"""Logging tracker — writes every tracked event to the structured log.

Useful as the development default and as an audit trail next to real
analytics backends. Payloads from other domains are reduced to their ids.
"""

import structlog

from tracking.tracker.capabilities import (
    CartProductActionAddTracker,
    CartProductActionRemoveTracker,
    CartUpdateTracker,
    CategoryPageViewTracker,
    CheckoutCompleteTracker,
    CheckoutStepTracker,
    CheckoutTracker,
    ProductImpressionTracker,
    ProductViewTracker,
    Tracker,
)

logger = structlog.get_logger(__name__)


def _ref(obj) -> str | None:
    """Best-effort identifier for a payload object."""
    if obj is None:
        return None
    for attr in ("id", "order_id", "cart_id", "product_id", "name"):
        value = getattr(obj, attr, None)
        if value is not None:
            return str(value)
    return str(obj)


class LoggingTracker(
    Tracker,
    CategoryPageViewTracker,
    ProductImpressionTracker,
    ProductViewTracker,
    CartUpdateTracker,
    CartProductActionAddTracker,
    CartProductActionRemoveTracker,
    CheckoutTracker,
    CheckoutStepTracker,
    CheckoutCompleteTracker,
):
    """Logs storefront events. Does not implement the deprecated product add/remove capabilities."""

    def track_category_page_view(self, category, page=None) -> None:
        categories = category if isinstance(category, (list, tuple)) else [category]
        logger.info(
            "Category page viewed",
            categories=[_ref(c) for c in categories],
            page=_ref(page),
        )

    def track_product_impression(self, product) -> None:
        logger.info("Product impression", product=_ref(product))

    def track_product_view(self, product) -> None:
        logger.info("Product viewed", product=_ref(product))

    def track_cart_update(self, cart) -> None:
        logger.info("Cart updated", cart=_ref(cart))

    def track_cart_product_action_add(self, cart, product, quantity=1) -> None:
        logger.info("Product added to cart", cart=_ref(cart), product=_ref(product), quantity=quantity)

    def track_cart_product_action_remove(self, cart, product, quantity=1) -> None:
        logger.info("Product removed from cart", cart=_ref(cart), product=_ref(product), quantity=quantity)

    def track_checkout(self, cart) -> None:
        logger.info("Checkout started", cart=_ref(cart))

    def track_checkout_step(self, step, cart, step_number=None, checkout_option=None) -> None:
        logger.info(
            "Checkout step",
            step=_ref(step),
            cart=_ref(cart),
            step_number=step_number,
            checkout_option=checkout_option,
        )

    def track_checkout_complete(self, order) -> None:
        logger.info(
            "Checkout completed",
            order=_ref(order),
            grand_total=getattr(order, "grand_total", None),
            currency=getattr(order, "currency", None),
        )
