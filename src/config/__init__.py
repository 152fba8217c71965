from .settings import settings, get_settings
from .constants import (
    CORRELATION_ID_HEADER,
    DEFAULT_ERROR_MESSAGE,
    INVALID_REQUEST_MESSAGE,
    SLOW_REQUEST_SECONDS,
)

__all__ = [
    "settings",
    "get_settings",
    "CORRELATION_ID_HEADER",
    "DEFAULT_ERROR_MESSAGE",
    "INVALID_REQUEST_MESSAGE",
    "SLOW_REQUEST_SECONDS",
]
