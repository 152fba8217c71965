"""
Context management utilities.

Holds the request correlation ID in a context variable so that it follows
the request across awaits and appears in every log entry.
"""

import logging
from contextvars import ContextVar
from typing import Optional
from uuid import uuid4

logger = logging.getLogger(__name__)

correlation_id_var: ContextVar[Optional[str]] = ContextVar(
    'correlation_id',
    default=None
)


def get_correlation_id() -> Optional[str]:
    """
    Get the current correlation ID from context.

    Returns:
        Current correlation ID or None if not set
    """
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID in context; empty values are ignored."""
    if not correlation_id:
        logger.warning("Attempted to set empty correlation_id")
        return

    correlation_id_var.set(correlation_id)


def generate_correlation_id() -> str:
    """Generate a new correlation ID and set it in context."""
    correlation_id = str(uuid4())
    set_correlation_id(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    """Clear the correlation ID from context."""
    correlation_id_var.set(None)
