"""
Admin session service.

Wraps the per-request Django session (server-side store keyed by an opaque
cookie id). Handlers never read ``request.session`` directly; they go
through ``AdminSession.for_request(request)``.
"""
import logging

from django.conf import settings

logger = logging.getLogger(__name__)

SESSION_KEY = 'admin_user'


class SessionIdentity:
    """The logged-in identity held in the session record."""

    __slots__ = ('id', 'username', 'email', 'role')

    is_authenticated = True

    def __init__(self, id, username, email, role):
        self.id = id
        self.username = username
        self.email = email
        self.role = role

    @classmethod
    def from_user(cls, user):
        return cls(id=str(user.id), username=user.username, email=user.email, role=user.role)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'role': self.role,
        }

    def __repr__(self):
        return f"SessionIdentity({self.username!r}, role={self.role!r})"


class AdminSession:
    """Key-value session service for one request."""

    def __init__(self, store):
        self.store = store

    @classmethod
    def for_request(cls, request):
        return cls(request.session)

    @property
    def identity(self):
        record = self.store.get(SESSION_KEY)
        if not record:
            return None
        try:
            return SessionIdentity(**record)
        except TypeError:
            logger.warning("Discarding malformed admin session record")
            return None

    @property
    def is_authenticated(self):
        return self.identity is not None

    def login(self, user):
        """Start a fresh session for ``user``; lifetime ADMIN_SESSION_AGE."""
        self.store.cycle_key()
        identity = SessionIdentity.from_user(user)
        self.store[SESSION_KEY] = identity.to_dict()
        self.store.set_expiry(settings.ADMIN_SESSION_AGE)
        return identity

    def logout(self):
        """Destroy the session record unconditionally."""
        self.store.flush()
