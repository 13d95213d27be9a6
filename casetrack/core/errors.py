# casetrack/core/errors.py
import logging

from flask import jsonify, request
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from .exceptions import BaseAPIException

logger = logging.getLogger(__name__)


class APIError(BaseAPIException):
    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)

    def __str__(self):
        return self.message


def handle_api_error(error):
    """Handle APIError and the BaseAPIException family"""
    if error.status_code >= 500:
        logger.error(f"API Error: {error}")
    else:
        logger.warning(f"API Error {error.status_code}: {error}")
    response = jsonify(error.to_dict())
    response.status_code = error.status_code
    return response


def handle_validation_error(error):
    """Handle marshmallow ValidationError raised outside load_or_400"""
    logger.warning(f"Validation failed: {error.messages}")
    return jsonify({"error": "Validation failed", "details": error.messages}), 400


def handle_http_exception(error):
    """Keep werkzeug's status code but answer in JSON"""
    if error.code == 404:
        logger.warning(f"404 Error: {request.url}")
    return jsonify({"error": error.description or error.name}), error.code


def handle_unexpected_error(error):
    """Log the details, hand the client an opaque message"""
    logger.error(f"Unhandled Exception: {str(error)}", exc_info=True)
    return jsonify({"error": "Internal server error"}), 500


def register_error_handlers(app):
    """Register error handlers with the Flask app"""
    app.register_error_handler(BaseAPIException, handle_api_error)
    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_unexpected_error)
