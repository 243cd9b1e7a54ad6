"""Correlation ID management for request tracing.

The HTTP middleware sets one ID per request; JsonFormatter stamps it on
every log line emitted while handling that request.
"""

import uuid
from contextvars import ContextVar, Token

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Incoming IDs longer than this are replaced rather than echoed back.
MAX_CORRELATION_ID_LENGTH = 128


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def resolve_correlation_id(incoming: str | None) -> str:
    """Reuse a caller-supplied ID when it is usable, else mint a new one."""
    if incoming:
        incoming = incoming.strip()
        if incoming and len(incoming) <= MAX_CORRELATION_ID_LENGTH and incoming.isprintable():
            return incoming
    return generate_correlation_id()


def get_correlation_id() -> str:
    """Get current correlation ID from context."""
    return correlation_id_var.get()


def set_correlation_id(cid: str) -> Token[str]:
    return correlation_id_var.set(cid)


def reset_correlation_id(token: Token[str]) -> None:
    correlation_id_var.reset(token)
