"""Business errors raised by the quote services.

Every failure is scoped to a single operation: services raise one of these
before writing anything, and the error handlers in
``quotedesk.blueprints.errors`` turn them into JSON responses.
"""


class QuoteDeskError(Exception):
    status_code = 400

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}

    def to_dict(self):
        payload = {'success': False, 'message': self.message}
        if self.errors:
            payload['errors'] = self.errors
        return payload


class ValidationError(QuoteDeskError):
    """Malformed input; rejected before any state change."""
    status_code = 400


class AuthorizationError(QuoteDeskError):
    """Caller lacks the privilege for this operation."""
    status_code = 403


class NotFoundError(QuoteDeskError):
    status_code = 404


class InvalidTransitionError(QuoteDeskError):
    """The quote's current status does not allow the requested operation."""
    status_code = 409
