"""
Shared fixtures for the test suite.
"""
import smtplib

import pytest
from django.core.mail.backends.locmem import EmailBackend
from rest_framework.test import APIClient

from accounts.models import User

PASSWORD = 'testpass123'


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        username='sunny',
        email='sunny@example.com',
        password=PASSWORD,
        role=User.Role.ADMIN
    )


@pytest.fixture
def editor_user(db):
    return User.objects.create_user(
        username='editor',
        email='editor@example.com',
        password=PASSWORD,
        role=User.Role.EDITOR
    )


def log_in(client, user):
    response = client.post('/sunny/login', {'username': user.username, 'password': PASSWORD})
    assert response.status_code == 302
    return client


@pytest.fixture
def admin_client(client, admin_user):
    return log_in(client, admin_user)


@pytest.fixture
def editor_client(client, editor_user):
    return log_in(client, editor_user)


@pytest.fixture
def smtp_down(monkeypatch):
    """Make every outgoing email fail the way an unreachable relay does."""
    def refuse(self, messages):
        raise smtplib.SMTPServerDisconnected('Connection unexpectedly closed')

    monkeypatch.setattr(
        'django.core.mail.backends.locmem.EmailBackend.send_messages', refuse
    )


@pytest.fixture
def customer_mail_down(monkeypatch, settings):
    """Refuse mail to anyone but the owner; the notification still goes out."""
    deliver = EmailBackend.send_messages

    def owner_only(self, messages):
        if any(settings.CONTACT_EMAIL_TO not in message.to for message in messages):
            raise smtplib.SMTPServerDisconnected('Connection unexpectedly closed')
        return deliver(self, messages)

    monkeypatch.setattr(EmailBackend, 'send_messages', owner_only)
