"""Property-bag order adapter — orders that carry loosely typed properties.

Some order stores attach ad-hoc ``(name, type, value)`` properties to an
order object and persist them with the order. The tracking flag lives there
under the ``os_tracked`` key with type ``"bool"``.
"""

from collections.abc import Callable
from typing import Any

from tracking.order.port import OrderAlreadyTrackedError, OrderPersistenceError, TrackableOrder

TRACKED_PROPERTY = "os_tracked"


class PropertyBagOrder(TrackableOrder):
    """Order with a property bag, saved through an optional ``saver`` callable.

    ``saver`` receives the order and may return ``False`` or raise to signal
    a failed write. Extra keyword arguments become attributes, so trackers can
    read the order details they need (``order_id``, ``grand_total`` ...).
    """

    def __init__(
        self,
        properties: dict[str, tuple[str, Any]] | None = None,
        saver: Callable[["PropertyBagOrder"], bool | None] | None = None,
        **details,
    ):
        self._properties: dict[str, tuple[str, Any]] = dict(properties or {})
        self._saver = saver
        self.save_count = 0
        for key, value in details.items():
            setattr(self, key, value)

    def get_property(self, name: str) -> Any:
        entry = self._properties.get(name)
        return entry[1] if entry else None

    def set_property(self, name: str, type_: str, value: Any) -> None:
        self._properties[name] = (type_, value)

    def is_tracked(self) -> bool:
        return bool(self.get_property(TRACKED_PROPERTY))

    def mark_tracked(self) -> None:
        if self.is_tracked():
            raise OrderAlreadyTrackedError("Checkout complete already tracked for this order")
        self.set_property(TRACKED_PROPERTY, "bool", True)

    def save(self) -> None:
        if self._saver is not None:
            try:
                result = self._saver(self)
            except Exception as exc:
                raise OrderPersistenceError(f"Failed to save order: {exc}") from exc
            if result is False:
                raise OrderPersistenceError("Order store rejected the save")
        self.save_count += 1
