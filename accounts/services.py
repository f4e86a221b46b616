"""
Account services: credential checks and admin-managed user records.
"""
import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import IntegrityError

from core.exceptions import InvalidCredentials, ValidationError, store_errors
from .sessions import AdminSession

logger = logging.getLogger(__name__)

User = get_user_model()


def login(session: AdminSession, username: str, password: str):
    """
    Verify credentials and establish the admin session.

    Unknown usernames and wrong passwords raise the same InvalidCredentials.
    """
    if not username or not password:
        raise InvalidCredentials()

    with store_errors('look up user'):
        user = authenticate(username=username, password=password)

    if user is None:
        logger.info(f"Failed admin login for username {username!r}")
        raise InvalidCredentials()

    identity = session.login(user)
    logger.info(f"Admin login: {identity.username} ({identity.role})")
    return identity


def logout(session: AdminSession):
    identity = session.identity
    session.logout()
    if identity:
        logger.info(f"Admin logout: {identity.username}")


def create_user(username, email, password, role):
    """Create an admin-panel account with a hashed password."""
    username = (username or '').strip()
    email = (email or '').strip()
    if not username or not email or not password:
        raise ValidationError('Username, email and password are required.')
    if role not in User.Role.values:
        raise ValidationError(f"Unknown role: {role}")

    if User.objects.filter(username=username).exists():
        raise ValidationError('That username is already taken.')
    if User.objects.filter(email__iexact=email).exists():
        raise ValidationError('That email address is already in use.')

    with store_errors('create user'):
        try:
            return User.objects.create_user(
                username=username,
                email=email,
                password=password,
                role=role,
            )
        except IntegrityError:
            raise ValidationError('That username or email address is already in use.')


def delete_user(user_id, acting):
    """Delete an account. Admins cannot delete the account they are using."""
    if str(user_id) == acting.id:
        raise ValidationError('You cannot delete your own account.')
    with store_errors('delete user'):
        User.objects.filter(id=user_id).delete()
