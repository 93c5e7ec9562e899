"""Fake tracker — records every tracked event in memory for test assertions."""

from tracking.tracker.capabilities import (
    CartProductActionAddTracker,
    CartProductActionRemoveTracker,
    CartUpdateTracker,
    CategoryPageViewTracker,
    CheckoutCompleteTracker,
    CheckoutStepTracker,
    CheckoutTracker,
    ProductActionAddTracker,
    ProductActionRemoveTracker,
    ProductImpressionTracker,
    ProductViewTracker,
    Tracker,
)


class RecordingTracker(
    Tracker,
    CategoryPageViewTracker,
    ProductImpressionTracker,
    ProductViewTracker,
    CartUpdateTracker,
    CartProductActionAddTracker,
    CartProductActionRemoveTracker,
    ProductActionAddTracker,
    ProductActionRemoveTracker,
    CheckoutTracker,
    CheckoutStepTracker,
    CheckoutCompleteTracker,
):
    """Implements every capability and appends ``(event, payload)`` to ``events``."""

    def __init__(self, assortment_tenants=None, checkout_tenants=None, name: str | None = None):
        super().__init__(assortment_tenants, checkout_tenants)
        self.name = name or type(self).__name__
        self.events: list[tuple[str, dict]] = []
        self.should_succeed = True
        self.failure_reason = "Tracker backend unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Tracker backend unavailable"):
        """Configure the fake tracker behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def _record(self, event: str, **payload) -> None:
        if not self.should_succeed:
            raise RuntimeError(self.failure_reason)
        self.events.append((event, payload))

    def event_names(self) -> list[str]:
        return [event for event, _ in self.events]

    def track_category_page_view(self, category, page=None) -> None:
        self._record("category_page_view", category=category, page=page)

    def track_product_impression(self, product) -> None:
        self._record("product_impression", product=product)

    def track_product_view(self, product) -> None:
        self._record("product_view", product=product)

    def track_cart_update(self, cart) -> None:
        self._record("cart_update", cart=cart)

    def track_cart_product_action_add(self, cart, product, quantity=1) -> None:
        self._record("cart_product_action_add", cart=cart, product=product, quantity=quantity)

    def track_cart_product_action_remove(self, cart, product, quantity=1) -> None:
        self._record("cart_product_action_remove", cart=cart, product=product, quantity=quantity)

    def track_product_action_add(self, product, quantity=1) -> None:
        self._record("product_action_add", product=product, quantity=quantity)

    def track_product_action_remove(self, product, quantity=1) -> None:
        self._record("product_action_remove", product=product, quantity=quantity)

    def track_checkout(self, cart) -> None:
        self._record("checkout", cart=cart)

    def track_checkout_step(self, step, cart, step_number=None, checkout_option=None) -> None:
        self._record(
            "checkout_step",
            step=step,
            cart=cart,
            step_number=step_number,
            checkout_option=checkout_option,
        )

    def track_checkout_complete(self, order) -> None:
        self._record("checkout_complete", order=order)

    def reset(self):
        """Clear recorded events (useful between tests)."""
        self.events.clear()
        self.should_succeed = True
        self.failure_reason = "Tracker backend unavailable"

    def __repr__(self) -> str:
        return f"RecordingTracker({self.name!r})"
