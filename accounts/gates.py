"""
Authorization gates for the admin panel.

A gate is a predicate over the current ``SessionIdentity`` (or None) that
returns a tagged result: ``Allow()`` or ``Deny(reason, message)``. Gates are
evaluated before the handler runs and compose with ``all_of``.

    require_auth    live session, otherwise Deny('login')
    require_editor  require_auth, then role in {admin, editor}
    require_admin   require_auth, then role == admin

Function views use ``@gated(gate)``; DRF views use the ``GatePermission``
subclasses at the bottom of this module.
"""
from functools import wraps

from django.conf import settings
from django.http import JsonResponse
from django.shortcuts import redirect, render
from rest_framework import permissions

from .models import User
from .sessions import AdminSession

LOGIN = 'login'
FORBIDDEN = 'forbidden'


class Allow:
    allowed = True

    def __bool__(self):
        return True

    def __repr__(self):
        return 'Allow()'


class Deny:
    """
    A refusal. ``reason`` is LOGIN (recoverable by logging in) or
    FORBIDDEN (terminal for this request).
    """

    allowed = False

    def __init__(self, reason, message):
        self.reason = reason
        self.message = message

    @property
    def status_code(self):
        return 401 if self.reason == LOGIN else 403

    def __bool__(self):
        return False

    def __repr__(self):
        return f"Deny({self.reason!r}, {self.message!r})"


def all_of(*gates):
    """Evaluate gates in order; the first Deny wins."""
    def gate(identity):
        for check in gates:
            result = check(identity)
            if not result:
                return result
        return Allow()
    return gate


def require_auth(identity):
    if identity is None:
        return Deny(LOGIN, 'Please log in to continue.')
    return Allow()


def role_in(*roles):
    def gate(identity):
        if identity is not None and identity.role in roles:
            return Allow()
        return Deny(FORBIDDEN, f"You need {roles[-1]} privileges to access this page.")
    return gate


require_editor = all_of(require_auth, role_in(User.Role.ADMIN, User.Role.EDITOR))
require_admin = all_of(require_auth, role_in(User.Role.ADMIN))


def login_url():
    return f"/{settings.ADMIN_PATH_PREFIX}/login"


def check(request, gate):
    """Evaluate ``gate`` for the request's admin session."""
    identity = AdminSession.for_request(request).identity
    return gate(identity), identity


def denied_response(request, result, json=False):
    if json:
        return JsonResponse(
            {'success': False, 'error': result.message},
            status=result.status_code
        )
    if result.reason == LOGIN:
        return redirect(login_url())
    return render(
        request,
        'admin/error.html',
        {
            'title': 'Access Denied',
            'message': result.message,
            'user': AdminSession.for_request(request).identity,
        },
        status=403
    )


def gated(gate, json=False):
    """
    View decorator: run ``gate`` before the view.

    On success the identity is attached as ``request.admin_user``.
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            result, identity = check(request, gate)
            if not result:
                return denied_response(request, result, json=json)
            request.admin_user = identity
            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator


class GatePermission(permissions.BasePermission):
    """DRF permission backed by a gate."""

    gate = staticmethod(require_auth)

    def has_permission(self, request, view):
        result, identity = check(request, self.gate)
        if not result:
            self.message = result.message
            return False
        request.admin_user = identity
        return True


class IsSessionEditor(GatePermission):
    gate = staticmethod(require_editor)


class IsSessionAdmin(GatePermission):
    gate = staticmethod(require_admin)
