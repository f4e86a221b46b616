"""
Admin panel login and logout.
"""
import logging

from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods

from core.exceptions import AuthError, StoreError
from . import services
from .sessions import AdminSession

logger = logging.getLogger(__name__)


def login_page(request, error=None, status=200):
    return render(request, 'admin/login.html', {
        'title': 'Admin Login',
        'error': error,
    }, status=status)


@require_http_methods(['GET', 'POST'])
def login(request):
    session = AdminSession.for_request(request)

    if request.method == 'GET':
        if session.is_authenticated:
            return redirect('panel:dashboard')
        return login_page(request)

    try:
        services.login(
            session,
            request.POST.get('username', '').strip(),
            request.POST.get('password', ''),
        )
    except AuthError as e:
        return login_page(request, e.message)
    except StoreError as e:
        logger.error(f"Login error: {e}")
        return login_page(request, 'Login failed. Please try again.', status=500)

    return redirect('panel:dashboard')


@require_GET
def logout(request):
    services.logout(AdminSession.for_request(request))
    return redirect('panel:login')


@require_GET
def index(request):
    """The bare admin prefix: dashboard when logged in, login page otherwise."""
    if AdminSession.for_request(request).is_authenticated:
        return redirect('panel:dashboard')
    return redirect('panel:login')
