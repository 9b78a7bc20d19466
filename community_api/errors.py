"""
Domain errors raised by the services layer.

Each error carries the HTTP status the API reports for it; ``main.py``
registers a single exception handler that renders them as
``{"detail": message}``.
"""


class CommunityError(Exception):
    """Base class for expected, client-facing failures"""

    status_code = 400


class InvalidRequestError(CommunityError):
    """Input is well-formed but violates a business rule"""

    status_code = 400


class AuthenticationError(CommunityError):
    """Credentials or tokens are missing, invalid or expired"""

    status_code = 401


class ForbiddenError(CommunityError):
    """Caller is authenticated but may not touch this row"""

    status_code = 403


class NotFoundError(CommunityError):
    """Row does not exist or has been soft-deleted"""

    status_code = 404


class ConflictError(CommunityError):
    """Uniqueness rule would be violated"""

    status_code = 409
