"""Payment gateway boundary (Paystack)."""

from cognition_api.boundary.payments.paystack_client import PaystackClient

__all__ = ["PaystackClient"]
