"""Operational scripts run with ``python -m cognition_api.scripts.<name>``."""
