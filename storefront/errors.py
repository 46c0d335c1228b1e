# Filename: storefront/errors.py
# Error kinds raised by the storefront core and the generation boundary.


class StoreError(Exception):
    """Base class for every error the storefront raises on purpose."""


class ValidationError(StoreError, ValueError):
    """User input missing or out of range. Raised before any state changes."""


class GenerationError(StoreError):
    """The generation service was unreachable, refused the call, or returned unusable data."""
