"""Adapters for external systems: MongoDB, Firebase, Paystack, local file storage."""
