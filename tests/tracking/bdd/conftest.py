"""Shared BDD fixtures and step definitions for the Tracking domain."""

import pytest
from pytest_bdd import given, parsers
from tracking.environment.environment import StaticEnvironment
from tracking.tracker.capabilities import CheckoutCompleteTracker, ProductViewTracker, Tracker
from tracking.tracker.manager import TrackingManager


class ScenarioProductViewTracker(Tracker, ProductViewTracker):
    def __init__(self, name, **tenants):
        super().__init__(**tenants)
        self.name = name
        self.viewed = []
        self.completed = []

    def track_product_view(self, product):
        self.viewed.append(product)


class ScenarioCheckoutTracker(ScenarioProductViewTracker, CheckoutCompleteTracker):
    def track_checkout_complete(self, order):
        self.completed.append(order)


def _tenants(value):
    if value == "*":
        return []
    return [tenant.strip() for tenant in value.split(",") if tenant.strip()]


@pytest.fixture
def environment():
    return StaticEnvironment()


@pytest.fixture
def trackers():
    """Trackers by name, in registration order."""
    return {}


@pytest.fixture
def manager(environment):
    return TrackingManager(environment=environment)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse(
        'a tracker "{name}" scoped to assortment "{assortment}" and checkout "{checkout}" that tracks product views'
    )
)
def product_view_tracker(manager, trackers, name, assortment, checkout):
    tracker = ScenarioProductViewTracker(
        name, assortment_tenants=_tenants(assortment), checkout_tenants=_tenants(checkout)
    )
    trackers[name] = tracker
    manager.register_tracker(tracker)


@given(
    parsers.cfparse(
        'a tracker "{name}" scoped to assortment "{assortment}" and checkout "{checkout}" '
        "that tracks product views and checkout completes"
    )
)
def checkout_tracker(manager, trackers, name, assortment, checkout):
    tracker = ScenarioCheckoutTracker(name, assortment_tenants=_tenants(assortment), checkout_tenants=_tenants(checkout))
    trackers[name] = tracker
    manager.register_tracker(tracker)


@given(parsers.cfparse('the current tenants are assortment "{assortment}" and checkout "{checkout}"'))
def current_tenants(environment, assortment, checkout):
    environment.set_assortment_tenant(assortment)
    environment.set_checkout_tenant(checkout)
