"""Request-scoped context helpers."""

from .context import (
    correlation_id_var,
    get_correlation_id,
    set_correlation_id,
    generate_correlation_id,
    clear_correlation_id,
)

__all__ = [
    "correlation_id_var",
    "get_correlation_id",
    "set_correlation_id",
    "generate_correlation_id",
    "clear_correlation_id",
]
