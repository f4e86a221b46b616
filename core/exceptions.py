"""
Site-wide error taxonomy.

Every externally facing handler catches these at its boundary and turns
them into a rendered error view or a JSON failure envelope.
"""
from contextlib import contextmanager
import logging

from django.db import DatabaseError

logger = logging.getLogger(__name__)


class SiteError(Exception):
    """Base class for errors raised by the site's own code."""

    default_message = 'An unexpected error occurred.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SiteError):
    """Bad or missing form input. User-correctable, returned inline."""

    default_message = 'Please check the submitted information.'


class AuthError(SiteError):
    """Missing session, bad credentials or insufficient role."""

    default_message = 'Authentication required.'


class InvalidCredentials(AuthError):
    """Raised for an unknown username and for a wrong password alike."""

    default_message = 'Invalid username or password'


class StoreError(SiteError):
    """A document-store read or write failed."""

    default_message = 'The database operation failed.'


class MailError(SiteError):
    """The SMTP relay refused or could not be reached."""

    default_message = 'The email could not be sent.'


class StatusTransitionError(SiteError):
    """Raised when an invalid status transition is attempted."""
    pass


@contextmanager
def store_errors(operation):
    """Re-raise database failures inside the block as StoreError."""
    try:
        yield
    except DatabaseError as exc:
        logger.error(f"Store error during {operation}: {exc}")
        raise StoreError(f"Failed to {operation}") from exc
