"""Tracker base class and one narrow interface per capability.

A concrete tracker subclasses ``Tracker`` and any subset of the capability
ABCs below. The manager decides whether a tracker receives an event with an
``isinstance`` check against the capability, so capabilities are independent:
implementing one never implies another. In particular the deprecated
single-argument add/remove capabilities are unrelated to the cart-aware ones.

Payload objects (products, carts, checkout steps, orders) belong to other
domains and are passed through untouched.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable


class Tracker(ABC):
    """A tracking backend, optionally scoped to assortment and checkout tenants.

    An empty tenant set means the tracker matches every tenant on that axis.
    """

    def __init__(
        self,
        assortment_tenants: Iterable[str] | None = None,
        checkout_tenants: Iterable[str] | None = None,
    ):
        self._assortment_tenants = frozenset(assortment_tenants or ())
        self._checkout_tenants = frozenset(checkout_tenants or ())

    def assortment_tenants(self) -> frozenset[str]:
        return self._assortment_tenants

    def checkout_tenants(self) -> frozenset[str]:
        return self._checkout_tenants

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(assortment_tenants={sorted(self._assortment_tenants)}, "
            f"checkout_tenants={sorted(self._checkout_tenants)})"
        )


# ---------------------------------------------------------------------------
# Catalogue browsing
# ---------------------------------------------------------------------------
class CategoryPageViewTracker(ABC):
    @abstractmethod
    def track_category_page_view(self, category, page=None) -> None:
        """Track a view of a category listing page.

        Args:
            category: One category, or a list of categories, matching the page.
            page: Any page information the backend can use.
        """
        ...


class ProductImpressionTracker(ABC):
    @abstractmethod
    def track_product_impression(self, product) -> None:
        """Track a product shown in a list (search result, teaser, category)."""
        ...


class ProductViewTracker(ABC):
    @abstractmethod
    def track_product_view(self, product) -> None:
        """Track a product detail page view."""
        ...


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartUpdateTracker(ABC):
    @abstractmethod
    def track_cart_update(self, cart) -> None: ...


class CartProductActionAddTracker(ABC):
    @abstractmethod
    def track_cart_product_action_add(self, cart, product, quantity=1) -> None: ...


class CartProductActionRemoveTracker(ABC):
    @abstractmethod
    def track_cart_product_action_remove(self, cart, product, quantity=1) -> None: ...


class ProductActionAddTracker(ABC):
    """Deprecated: implement ``CartProductActionAddTracker`` instead."""

    @abstractmethod
    def track_product_action_add(self, product, quantity=1) -> None: ...


class ProductActionRemoveTracker(ABC):
    """Deprecated: implement ``CartProductActionRemoveTracker`` instead."""

    @abstractmethod
    def track_product_action_remove(self, product, quantity=1) -> None: ...


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutTracker(ABC):
    @abstractmethod
    def track_checkout(self, cart) -> None:
        """Track the start of checkout (first step)."""
        ...


class CheckoutStepTracker(ABC):
    @abstractmethod
    def track_checkout_step(self, step, cart, step_number=None, checkout_option=None) -> None: ...


class CheckoutCompleteTracker(ABC):
    @abstractmethod
    def track_checkout_complete(self, order) -> None:
        """Track a completed checkout. Called at most once per order."""
        ...
