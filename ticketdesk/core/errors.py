# ticketdesk/core/errors.py
"""
Service-level errors.

Services raise these; ``ticketdesk.main`` turns them into JSON responses with
the matching HTTP status code.
"""


class ServiceError(Exception):
    """Base class for errors a caller is allowed to see."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(ServiceError):
    status_code = 401


class Forbidden(ServiceError):
    status_code = 403


class NotFound(ServiceError):
    status_code = 404


class InvalidArgument(ServiceError):
    status_code = 400


class InvalidState(ServiceError):
    """Operation is not legal in the ticket's current lifecycle state."""

    status_code = 400
