"""
Application-wide constants.
"""

# Service error payloads
DEFAULT_ERROR_MESSAGE = "An error occurred"
INVALID_REQUEST_MESSAGE = "Invalid request"

# Requests slower than this are logged at WARNING
SLOW_REQUEST_SECONDS = 2.0

# Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
