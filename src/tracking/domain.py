"""Tracking bounded context — e-commerce analytics fan-out.

Dispatches storefront lifecycle events (page views, impressions, cart
mutations, checkout steps and completion) to the tracking backends that
are active for the current assortment and checkout tenants, and keeps the
once-per-order record of checkout-complete tracking.
"""

import structlog
from protean.domain import Domain

tracking = Domain(name="tracking")

logger = structlog.get_logger(__name__)
