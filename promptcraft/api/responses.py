from flask import jsonify
from pydantic import ValidationError

from promptcraft.schemas import validation_errors


def _message(msg, status):
    return jsonify({"message": str(msg)}), status


def not_found(entity: str):
    return _message(f"{entity} not found", 404)


def server_error(action: str):
    # The cause goes to the log, never to the client
    return _message(f"Failed to {action}", 500)


def invalid(errors):
    if isinstance(errors, ValidationError):
        errors = validation_errors(errors)
    return jsonify({"message": "Invalid data", "errors": errors}), 400


def no_content():
    return "", 204
