"""Active-tenant cache — memoizes the trackers active for the current tenants.

Tenants are usually stable for the whole of a request, so the filtered
subset is computed once per tenant change instead of once per event.

The cache holds a single immutable ``ActiveTrackerSnapshot``: the tenant
context it was computed for, paired with the resulting trackers. A
recompute builds a new snapshot and swaps the reference under the owner's
lock, so a reader can get a stale snapshot after a tenant switch but never a
context paired with another context's trackers.
"""

import threading
from dataclasses import dataclass

import structlog

from tracking.tracker.capabilities import Tracker

logger = structlog.get_logger(__name__)

DEFAULT_TENANT = "default"


@dataclass(frozen=True)
class TenantContext:
    assortment_tenant: str
    checkout_tenant: str

    @classmethod
    def resolve(cls, assortment_tenant: str | None, checkout_tenant: str | None) -> "TenantContext":
        """Build a context, substituting ``"default"`` for absent or empty tenants."""
        return cls(
            assortment_tenant=assortment_tenant or DEFAULT_TENANT,
            checkout_tenant=checkout_tenant or DEFAULT_TENANT,
        )

    @classmethod
    def from_environment(cls, environment) -> "TenantContext":
        return cls.resolve(
            environment.current_assortment_tenant(),
            environment.current_checkout_tenant(),
        )


@dataclass(frozen=True)
class ActiveTrackerSnapshot:
    context: TenantContext
    trackers: tuple[Tracker, ...]


def is_active(tracker: Tracker, context: TenantContext) -> bool:
    """A tracker is active when EITHER tenant axis matches.

    An axis matches when the tracker is unrestricted on it (empty set) or
    lists the current tenant. The axes are combined with OR, so a tracker
    scoped only to a checkout tenant is active for every assortment tenant.
    """
    assortment_tenants = tracker.assortment_tenants()
    if not assortment_tenants or context.assortment_tenant in assortment_tenants:
        return True

    checkout_tenants = tracker.checkout_tenants()
    return not checkout_tenants or context.checkout_tenant in checkout_tenants


class ActiveTrackerCache:
    """Holds at most one snapshot: the most recently computed tenant context."""

    def __init__(self, lock=None):
        self._lock = lock or threading.RLock()
        self._snapshot: ActiveTrackerSnapshot | None = None

    @property
    def snapshot(self) -> ActiveTrackerSnapshot | None:
        return self._snapshot

    def get(self, environment, registry) -> tuple[Tracker, ...]:
        """Return the trackers active under the environment's current tenants.

        Reads the tenants fresh on every call. The first call, and any call
        after a tenant change or ``invalidate()``, recomputes.
        """
        context = TenantContext.from_environment(environment)

        snapshot = self._snapshot
        if snapshot is not None and snapshot.context == context:
            return snapshot.trackers

        with self._lock:
            # Another thread may have computed the same context meanwhile
            snapshot = self._snapshot
            if snapshot is not None and snapshot.context == context:
                return snapshot.trackers

            trackers = tuple(tracker for tracker in registry if is_active(tracker, context))
            self._snapshot = ActiveTrackerSnapshot(context=context, trackers=trackers)

        logger.debug(
            "Active trackers recomputed",
            assortment_tenant=context.assortment_tenant,
            checkout_tenant=context.checkout_tenant,
            active=len(trackers),
            registered=len(registry),
        )
        return trackers

    def invalidate(self) -> None:
        with self._lock:
            self._snapshot = None
