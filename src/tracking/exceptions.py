"""Base error for the Tracking domain."""


class TrackingError(Exception):
    """Base class for all tracking errors."""
