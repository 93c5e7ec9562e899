"""Tracking manager — fans storefront events out to the active trackers.

Every ``track_*`` operation follows the same pattern:

    active trackers for the current tenants (cached per tenant context)
      → keep those implementing the event's capability
      → call each one synchronously, in registration order

Nothing is returned and nothing is retried. Checkout complete additionally
checks and persists the order's tracking flag before any tracker runs, so it
fires at most once per order:

    UNTRACKED → (flag persisted) → TRACKING → (fan-out done) → TRACKED

By default a failing tracker propagates its exception and aborts the rest of
that fan-out. With ``isolate_failures=True`` every tracker gets its turn and
the failures are raised together as ``TrackerDispatchError`` afterwards.
"""

import threading
import warnings
from collections.abc import Iterable

import structlog

from tracking.environment.environment import Environment, StaticEnvironment
from tracking.order.port import OrderPersistenceError, TrackableOrder
from tracking.tracker.active_set import ActiveTrackerCache
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
from tracking.tracker.exceptions import TrackerDispatchError
from tracking.tracker.registry import TrackerRegistry

logger = structlog.get_logger(__name__)


class TrackingManager:
    def __init__(
        self,
        trackers: Iterable[Tracker] = (),
        environment: Environment | None = None,
        *,
        isolate_failures: bool = False,
    ):
        self._lock = threading.RLock()
        self._registry = TrackerRegistry()
        self._active_trackers = ActiveTrackerCache(lock=self._lock)
        self.environment = environment or StaticEnvironment()
        self.isolate_failures = isolate_failures

        for tracker in trackers:
            self.register_tracker(tracker)

    # -------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------
    def register_tracker(self, tracker: Tracker) -> None:
        with self._lock:
            self._registry.register(tracker)
            self._active_trackers.invalidate()

        logger.debug("Tracker registered", tracker=type(tracker).__name__)

    def get_trackers(self) -> tuple[Tracker, ...]:
        """All registered trackers, active or not."""
        return self._registry.list()

    def get_active_trackers(self) -> tuple[Tracker, ...]:
        """Trackers active for the current assortment and checkout tenants."""
        return self._active_trackers.get(self.environment, self._registry)

    # -------------------------------------------------------------------
    # Fan-out
    # -------------------------------------------------------------------
    def _dispatch(self, capability: type, method: str, *args) -> None:
        failures: list[tuple[Tracker, Exception]] = []

        for tracker in self.get_active_trackers():
            if not isinstance(tracker, capability):
                continue

            if not self.isolate_failures:
                getattr(tracker, method)(*args)
                continue

            try:
                getattr(tracker, method)(*args)
            except Exception as exc:
                logger.error(
                    "Tracker failed",
                    tracker=type(tracker).__name__,
                    event=method,
                    error=str(exc),
                )
                failures.append((tracker, exc))

        if failures:
            raise TrackerDispatchError(method, failures)

    # -------------------------------------------------------------------
    # Catalogue browsing
    # -------------------------------------------------------------------
    def track_category_page_view(self, category, page=None) -> None:
        """Track a category page view.

        Args:
            category: One or more categories matching the page.
            page: Any page information the trackers can use.
        """
        self._dispatch(CategoryPageViewTracker, "track_category_page_view", category, page)

    def track_product_impression(self, product) -> None:
        self._dispatch(ProductImpressionTracker, "track_product_impression", product)

    def track_product_view(self, product) -> None:
        self._dispatch(ProductViewTracker, "track_product_view", product)

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def track_cart_update(self, cart) -> None:
        self._dispatch(CartUpdateTracker, "track_cart_update", cart)

    def track_cart_product_action_add(self, cart, product, quantity=1) -> None:
        self._dispatch(CartProductActionAddTracker, "track_cart_product_action_add", cart, product, quantity)

    def track_cart_product_action_remove(self, cart, product, quantity=1) -> None:
        self._dispatch(CartProductActionRemoveTracker, "track_cart_product_action_remove", cart, product, quantity)

    def track_product_action_add(self, product, quantity=1) -> None:
        """Deprecated: use ``track_cart_product_action_add``.

        Only reaches trackers implementing ``ProductActionAddTracker``.
        """
        warnings.warn(
            "track_product_action_add is deprecated, use track_cart_product_action_add",
            DeprecationWarning,
            stacklevel=2,
        )
        self._dispatch(ProductActionAddTracker, "track_product_action_add", product, quantity)

    def track_product_action_remove(self, product, quantity=1) -> None:
        """Deprecated: use ``track_cart_product_action_remove``.

        Only reaches trackers implementing ``ProductActionRemoveTracker``.
        """
        warnings.warn(
            "track_product_action_remove is deprecated, use track_cart_product_action_remove",
            DeprecationWarning,
            stacklevel=2,
        )
        self._dispatch(ProductActionRemoveTracker, "track_product_action_remove", product, quantity)

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def track_checkout(self, cart) -> None:
        """Track checkout start with its first step."""
        self._dispatch(CheckoutTracker, "track_checkout", cart)

    def track_checkout_step(self, step, cart, step_number=None, checkout_option=None) -> None:
        self._dispatch(CheckoutStepTracker, "track_checkout_step", step, cart, step_number, checkout_option)

    def track_checkout_complete(self, order: TrackableOrder) -> None:
        """Track checkout complete, at most once per order.

        The order's tracking flag is set and saved before any tracker runs.
        A second call for the same order is a no-op. If the flag cannot be
        saved, no tracker is called and ``OrderPersistenceError`` propagates.
        """
        if order.is_tracked():
            logger.warning(
                "Checkout complete already tracked, skipping",
                order=repr(order),
            )
            return

        order.mark_tracked()
        try:
            order.save()
        except OrderPersistenceError:
            logger.error("Tracking flag not persisted, checkout complete not dispatched", order=repr(order))
            raise

        self._dispatch(CheckoutCompleteTracker, "track_checkout_complete", order)
