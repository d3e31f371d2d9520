"""
Per-request tracing context.

Holds the correlation ID of the request being served and, once the bearer
token has been verified, the caller's Firebase uid. Both live in
contextvars so they follow the request across awaits and threadpool hops.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from contextvars import ContextVar

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")
caller_uid_ctx: ContextVar[str] = ContextVar("caller_uid", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Start tracing a request.

    Args:
        correlation_id: Inbound X-Correlation-ID, if the client sent one

    Returns:
        str: The ID in effect, generated when none was supplied
    """
    value = (correlation_id or "").strip() or uuid.uuid4().hex
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    return correlation_id_ctx.get()


def set_caller_uid(uid: str) -> None:
    """Record the authenticated caller for the rest of the request."""
    caller_uid_ctx.set(uid)


def get_caller_uid() -> str:
    return caller_uid_ctx.get()


def clear_correlation_id() -> None:
    """Forget the request's tracing context."""
    correlation_id_ctx.set("")
    caller_uid_ctx.set("")
