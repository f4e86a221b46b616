"""
User Management Admin Views

Admin-only: list, create and delete admin-panel accounts.
"""
import logging

from django.contrib import messages
from django.shortcuts import redirect
from django.views.decorators.http import require_http_methods, require_POST

from core.admin_pages import admin_render, redirect_with_error, site_error_response
from core.exceptions import SiteError, StoreError, store_errors
from .gates import gated, require_admin
from .models import User
from . import services

logger = logging.getLogger(__name__)


@gated(require_admin)
@require_http_methods(['GET', 'POST'])
def users(request):
    if request.method == 'POST':
        return user_create(request)

    try:
        with store_errors('load users'):
            accounts = list(User.objects.all())
    except StoreError as e:
        return site_error_response(request, e, 'Failed to load users')

    return admin_render(request, 'admin/users.html', {
        'title': 'Manage Users',
        'users': accounts,
        'roles': User.Role.choices,
    }, 'users')


def user_create(request):
    try:
        user = services.create_user(
            username=request.POST.get('username'),
            email=request.POST.get('email'),
            password=request.POST.get('password'),
            role=request.POST.get('role') or User.Role.EDITOR,
        )
    except SiteError as e:
        return site_error_response(request, e, 'Failed to create user')

    logger.info(f"User {user.username} ({user.role}) created by {request.admin_user.username}")
    messages.success(request, f"User {user.username} created.")
    return redirect('panel:users')


@gated(require_admin)
@require_POST
def user_delete(request, id):
    try:
        services.delete_user(id, acting=request.admin_user)
    except SiteError as e:
        return redirect_with_error(request, 'panel:users', e, 'Failed to delete user')

    logger.info(f"User {id} deleted by {request.admin_user.username}")
    return redirect('panel:users')
