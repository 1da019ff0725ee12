"""
Core Logging - Request-aware logging filter.

Usage in settings.py:
    LOGGING = {
        'filters': {
            'request_context': {
                '()': 'core.logging.RequestContextFilter',
            },
        },
        'handlers': {
            'console': {
                'filters': ['request_context'],
                ...
            },
        },
    }
"""

import logging
from contextvars import ContextVar
from typing import Optional

# Set by api.middleware.RequestIDMiddleware for the duration of a request
_request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


def get_current_request_id() -> Optional[str]:
    return _request_id_var.get()


def set_current_request_id(request_id: Optional[str]):
    """Bind a request ID to the current context. Returns the reset token."""
    return _request_id_var.set(request_id)


def reset_current_request_id(token) -> None:
    _request_id_var.reset(token)


class RequestContextFilter(logging.Filter):
    """
    Logging filter that adds request context to log records.

    Adds ``request_id`` ('-' outside of a request, e.g. in Celery workers).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_current_request_id() or '-'
        return True
