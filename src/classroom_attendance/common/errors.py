from __future__ import annotations

import logging
from functools import wraps

from ..core.exceptions import StoreError


def log_store_errors(action: str):
    """Log a StoreError at the service boundary, then re-raise it.

    No retry is attempted; callers own the retry policy.
    """

    def decorator(func):
        logger = logging.getLogger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except StoreError:
                logger.exception("Error %s", action)
                raise

        return wrapper

    return decorator
