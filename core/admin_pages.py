"""
Rendering helpers shared by the admin-panel views.
"""
import logging

from django.contrib import messages
from django.shortcuts import redirect, render

from .exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)


def admin_render(request, template, context, current_page='', status=200):
    """Render an admin page with the logged-in user and active nav item."""
    return render(request, template, {
        'user': getattr(request, 'admin_user', None),
        'current_page': current_page,
        **context,
    }, status=status)


def admin_error(request, message, status=500, title='Error'):
    return admin_render(request, 'admin/error.html', {
        'title': title,
        'message': message,
    }, status=status)


def site_error_response(request, exc, fallback):
    """
    Convert a SiteError raised by an admin handler into the error page.

    Validation messages are shown as-is; store failures show ``fallback``.
    """
    if isinstance(exc, ValidationError):
        return admin_error(request, exc.message, status=400)
    if isinstance(exc, StoreError):
        logger.error(f"{fallback}: {exc}")
    return admin_error(request, fallback, status=500)


def redirect_with_error(request, to, exc, fallback):
    """For delete/mark actions: flash the failure and go back to the list."""
    if isinstance(exc, ValidationError):
        logger.warning(f"{fallback}: {exc.message}")
        message = exc.message
    else:
        logger.error(f"{fallback}: {exc}")
        message = fallback
    messages.error(request, message)
    return redirect(to)
