from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def api_errors(view):
    """Map service exceptions to JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return json_error(str(e), 400)
        except StoreError:
            return json_error("Document store unavailable", 502)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return json_error("Internal server error", 500)

    return wrapper


def flag(value) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}
