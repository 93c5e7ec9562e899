"""Environment port — where the manager learns the current tenants.

How tenants are determined (domain, session, customer group) is decided by
the storefront. The tracking domain only asks the two questions below on
every active-set evaluation; ``None`` or ``""`` means no active tenant.

``ContextEnvironment`` keeps the tenants in ``contextvars`` so concurrent
requests and asyncio tasks each see their own values and can share one
manager. ``StaticEnvironment`` holds plain attributes, for scripts and tests.
"""

import contextlib
import contextvars
from abc import ABC, abstractmethod

import structlog

_ctx_assortment_tenant: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "tracking_assortment_tenant", default=None
)
_ctx_checkout_tenant: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "tracking_checkout_tenant", default=None
)


class Environment(ABC):
    """Abstract interface for tenant resolution."""

    @abstractmethod
    def current_assortment_tenant(self) -> str | None: ...

    @abstractmethod
    def current_checkout_tenant(self) -> str | None: ...


class StaticEnvironment(Environment):
    """Environment with fixed tenants, changed explicitly through setters."""

    def __init__(self, assortment_tenant: str | None = None, checkout_tenant: str | None = None):
        self.assortment_tenant = assortment_tenant
        self.checkout_tenant = checkout_tenant

    def current_assortment_tenant(self) -> str | None:
        return self.assortment_tenant

    def current_checkout_tenant(self) -> str | None:
        return self.checkout_tenant

    def set_assortment_tenant(self, tenant: str | None) -> None:
        self.assortment_tenant = tenant

    def set_checkout_tenant(self, tenant: str | None) -> None:
        self.checkout_tenant = tenant


class ContextEnvironment(Environment):
    """Environment backed by context variables (request / task scoped)."""

    def current_assortment_tenant(self) -> str | None:
        return _ctx_assortment_tenant.get()

    def current_checkout_tenant(self) -> str | None:
        return _ctx_checkout_tenant.get()

    def set_assortment_tenant(self, tenant: str | None) -> contextvars.Token:
        return _ctx_assortment_tenant.set(tenant)

    def set_checkout_tenant(self, tenant: str | None) -> contextvars.Token:
        return _ctx_checkout_tenant.set(tenant)

    @contextlib.contextmanager
    def tenant_scope(self, assortment: str | None = None, checkout: str | None = None):
        """Set both tenants for nested calls and restore the previous values on exit.

        The tenants are also bound to structlog's context so every log line
        emitted inside the scope carries them.
        """
        assortment_token = _ctx_assortment_tenant.set(assortment)
        checkout_token = _ctx_checkout_tenant.set(checkout)
        try:
            with structlog.contextvars.bound_contextvars(
                assortment_tenant=assortment or "default",
                checkout_tenant=checkout or "default",
            ):
                yield self
        finally:
            _ctx_checkout_tenant.reset(checkout_token)
            _ctx_assortment_tenant.reset(assortment_token)
