"""Correlation ID tracing so log lines can be grouped per analyzed symbol."""

import uuid
import logging
from contextvars import ContextVar
from typing import Optional

# Context variable for storing correlation ID across async boundaries
correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    """Logging filter that adds a 'correlation_id' attribute to each record."""

    def filter(self, record):
        cid = correlation_id.get() or "-"
        record.correlation_id = cid[:8]
        return True


def get_correlation_id() -> str:
    """Get current correlation ID, creating one if it doesn't exist."""
    cid = correlation_id.get()
    if cid is None:
        cid = new_correlation_id()
    return cid


def set_correlation_id(cid: Optional[str]):
    """Set correlation ID for current context. Returns a token for reset."""
    return correlation_id.set(cid)


def new_correlation_id() -> str:
    """Start a fresh correlation ID in the current context."""
    cid = str(uuid.uuid4())
    correlation_id.set(cid)
    return cid
