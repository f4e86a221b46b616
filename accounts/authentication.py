"""
DRF authentication backed by the admin session.
"""
from rest_framework.authentication import SessionAuthentication

from .sessions import AdminSession


class AdminSessionAuthentication(SessionAuthentication):
    """
    Authenticate JSON admin endpoints from the admin session record.

    ``request.user`` becomes the ``SessionIdentity``. CSRF is enforced the
    same way DRF enforces it for Django sessions.
    """

    def authenticate(self, request):
        identity = AdminSession.for_request(request._request).identity
        if identity is None:
            return None

        self.enforce_csrf(request)
        return (identity, None)

    def authenticate_header(self, request):
        return 'Session realm="admin"'
