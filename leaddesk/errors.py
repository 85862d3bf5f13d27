"""
API error taxonomy and the Flask handlers that turn errors into JSON bodies.

Every domain error carries its HTTP status. Route code raises; the handlers
registered here are the only place responses for failures are built.
"""
import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound, RequestEntityTooLarge

logger = logging.getLogger('leaddesk.errors')


class ApiError(Exception):
    """Base class for errors recovered at the route boundary."""
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = 'Invalid request.'


class MalformedBody(ValidationError):
    default_message = 'Invalid JSON'


class PayloadTooLarge(ValidationError):
    default_message = 'Payload too large'


class AuthenticationError(ApiError):
    status_code = 401
    default_message = 'Unauthorized advisor request.'


class AuthorizationError(ApiError):
    status_code = 403
    default_message = 'Insufficient permissions.'


class NotFoundError(ApiError):
    status_code = 404
    default_message = 'Not found'


class RateLimitExceeded(ApiError):
    status_code = 429
    default_message = 'Too many requests.'


def error_response(message, status_code):
    return jsonify({'error': message}), status_code


def register_error_handlers(app):
    """Attach JSON error handlers to the app."""

    @app.errorhandler(ApiError)
    def handle_api_error(e):
        if e.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, e.message)
        return error_response(e.message, e.status_code)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(e):
        return error_response(PayloadTooLarge.default_message, PayloadTooLarge.status_code)

    @app.errorhandler(NotFound)
    @app.errorhandler(MethodNotAllowed)
    def handle_not_found(e):
        return error_response(NotFoundError.default_message, NotFoundError.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return error_response(e.description, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response('Internal server error', 500)
