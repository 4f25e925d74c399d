from flask import jsonify
from werkzeug.exceptions import HTTPException

from .logger import Log


# Handle PermissionError raised by the approval gate
def handle_permission_error(error):
    response = {
        "error": "PermissionError",
        "message": str(error),
        "status_code": 403  # Forbidden
    }
    return jsonify(response), 403


# Handle marshmallow ValidationError raised outside of flask-smorest argument parsing
def handle_validation_error(error):
    response = {
        "error": "Validation Error",
        "message": error.messages,
        "status_code": 400  # Bad Request
    }
    return jsonify(response), 400


# Handle storage failures; the driver message is surfaced to the caller
def handle_storage_error(error):
    Log.error(f"[error_handlers.py][handle_storage_error] {error}")
    response = {
        "message": str(error),
        "status_code": 500
    }
    return jsonify(response), 500


# Handle anything else a handler let escape
def handle_unexpected_error(error):
    if isinstance(error, HTTPException):
        return error

    Log.exception(f"[error_handlers.py][handle_unexpected_error] {type(error).__name__}: {error}")
    response = {
        "message": str(error),
        "status_code": 500
    }
    return jsonify(response), 500
