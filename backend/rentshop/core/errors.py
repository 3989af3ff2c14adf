"""
rentshop/core/errors.py
Store-level exceptions. Routers translate these into HTTP errors.
"""


class StoreError(Exception):
    """Base class for errors raised by the stores."""


class MissingSellerError(StoreError, ValueError):
    """add_product was called without a seller_id."""

    def __init__(self, message: str = "seller_id is required to list a product"):
        super().__init__(message)


class EmptyCartError(StoreError):
    """Checkout was attempted with no cart lines."""


class RemoteUnavailable(StoreError):
    """The remote data service is not configured; no call was attempted."""


class StaleResponse(StoreError):
    """A remote response arrived after a newer one had already been applied."""

    def __init__(self, seq: int, applied: int):
        super().__init__(f"response #{seq} superseded by #{applied}")
        self.seq = seq
        self.applied = applied
