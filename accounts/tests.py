"""
Tests for admin sessions, gates, login/logout and user management.
"""
import logging

import pytest
from django.contrib.sessions.backends.db import SessionStore
from django.core.management import call_command

from accounts import services
from accounts.gates import (
    Allow, Deny, FORBIDDEN, LOGIN, all_of, require_admin, require_auth, require_editor
)
from accounts.models import User
from accounts.sessions import SESSION_KEY, AdminSession, SessionIdentity
from core.exceptions import InvalidCredentials, ValidationError

pytestmark = pytest.mark.django_db

PASSWORD = 'testpass123'


def identity(role):
    return SessionIdentity(id='1', username='someone', email='someone@example.com', role=role)


class TestAdminSession:
    """Session service over the database session store."""

    def test_login_stores_identity(self, admin_user):
        session = AdminSession(SessionStore())
        session.login(admin_user)

        assert session.identity.username == 'sunny'
        assert session.identity.role == 'admin'
        assert session.store[SESSION_KEY]['id'] == str(admin_user.id)
        assert session.store.get_expiry_age() == 24 * 60 * 60

    def test_login_cycles_session_key(self, admin_user):
        store = SessionStore()
        store['marker'] = True
        store.save()
        old_key = store.session_key

        AdminSession(store).login(admin_user)

        assert store.session_key != old_key

    def test_empty_session_has_no_identity(self):
        session = AdminSession(SessionStore())
        assert session.identity is None
        assert session.is_authenticated is False

    def test_malformed_record_is_ignored(self):
        store = SessionStore()
        store[SESSION_KEY] = {'username': 'ghost'}
        assert AdminSession(store).identity is None

    def test_logout_flushes(self, admin_user):
        session = AdminSession(SessionStore())
        session.login(admin_user)
        session.logout()
        assert session.identity is None


class TestLoginService:

    def test_valid_credentials(self, editor_user):
        session = AdminSession(SessionStore())
        result = services.login(session, 'editor', PASSWORD)
        assert result.role == 'editor'
        assert session.is_authenticated

    def test_wrong_password_and_unknown_user_look_the_same(self, editor_user):
        session = AdminSession(SessionStore())

        with pytest.raises(InvalidCredentials) as wrong_password:
            services.login(session, 'editor', 'nope')
        with pytest.raises(InvalidCredentials) as unknown_user:
            services.login(session, 'nobody', PASSWORD)

        assert wrong_password.value.message == unknown_user.value.message
        assert wrong_password.value.message == 'Invalid username or password'
        assert session.identity is None

    def test_password_is_hashed(self, editor_user):
        assert editor_user.password != PASSWORD
        assert editor_user.check_password(PASSWORD)


class TestGates:

    def test_require_auth(self):
        assert isinstance(require_auth(identity('editor')), Allow)
        denied = require_auth(None)
        assert denied.reason == LOGIN
        assert denied.status_code == 401

    def test_require_editor(self):
        assert require_editor(identity('editor'))
        assert require_editor(identity('admin'))
        assert require_editor(None).reason == LOGIN
        assert require_editor(identity('viewer')).reason == FORBIDDEN

    def test_require_admin(self):
        assert require_admin(identity('admin'))
        denied = require_admin(identity('editor'))
        assert isinstance(denied, Deny)
        assert denied.reason == FORBIDDEN
        assert denied.status_code == 403

    def test_all_of_returns_first_denial(self):
        first = Deny(FORBIDDEN, 'first')
        gate = all_of(lambda i: Allow(), lambda i: first, lambda i: Deny(LOGIN, 'second'))
        assert gate(None) is first


class TestLoginViews:

    def test_login_page_renders(self, client):
        response = client.get('/sunny/login')
        assert response.status_code == 200
        assert b'name="password"' in response.content

    def test_login_redirects_to_dashboard(self, client, editor_user):
        response = client.post('/sunny/login', {'username': 'editor', 'password': PASSWORD})

        assert response.status_code == 302
        assert response['Location'] == '/sunny/dashboard'
        assert client.session[SESSION_KEY]['username'] == 'editor'

    def test_bad_login_shows_error(self, client, editor_user):
        response = client.post('/sunny/login', {'username': 'editor', 'password': 'wrong'})

        assert response.status_code == 200
        assert b'Invalid username or password' in response.content
        assert SESSION_KEY not in client.session

    def test_logout_destroys_session(self, editor_client):
        response = editor_client.get('/sunny/logout')

        assert response.status_code == 302
        assert response['Location'] == '/sunny/login'
        assert SESSION_KEY not in editor_client.session
        assert editor_client.get('/sunny/dashboard')['Location'] == '/sunny/login'

    def test_bare_prefix_redirects(self, client):
        assert client.get('/sunny')['Location'] == '/sunny/login'


class TestRouteGating:

    def test_anonymous_is_sent_to_login(self, client):
        for url in ['/sunny/dashboard', '/sunny/posts', '/sunny/messages', '/sunny/users']:
            response = client.get(url)
            assert response.status_code == 302, url
            assert response['Location'] == '/sunny/login'

    def test_editor_cannot_manage_users(self, editor_client):
        response = editor_client.get('/sunny/users')
        assert response.status_code == 403
        assert b'admin privileges' in response.content

    def test_editor_can_manage_content(self, editor_client):
        assert editor_client.get('/sunny/posts').status_code == 200
        assert editor_client.get('/sunny/messages').status_code == 200


class TestUserManagement:

    def test_admin_lists_users(self, admin_client, editor_user):
        response = admin_client.get('/sunny/users')
        assert response.status_code == 200
        assert {u.username for u in response.context['users']} == {'editor', 'sunny'}

    def test_create_user(self, admin_client):
        response = admin_client.post('/sunny/users', {
            'username': 'newbie',
            'email': 'newbie@example.com',
            'password': 'secret-pass',
            'role': 'editor',
        })

        assert response.status_code == 302
        user = User.objects.get(username='newbie')
        assert user.role == 'editor'
        assert user.password != 'secret-pass'
        assert user.check_password('secret-pass')

    def test_duplicate_username_is_rejected(self, admin_client, editor_user):
        response = admin_client.post('/sunny/users', {
            'username': 'editor',
            'email': 'other@example.com',
            'password': 'secret-pass',
            'role': 'editor',
        })

        assert response.status_code == 400
        assert b'already taken' in response.content
        assert User.objects.filter(username='editor').count() == 1

    def test_duplicate_email_is_rejected(self, admin_user):
        with pytest.raises(ValidationError):
            services.create_user('another', 'SUNNY@example.com', 'pw', 'editor')

    def test_unknown_role_is_rejected(self, db):
        with pytest.raises(ValidationError):
            services.create_user('x', 'x@example.com', 'pw', 'owner')

    def test_delete_user(self, admin_client, editor_user):
        response = admin_client.post(f'/sunny/users/delete/{editor_user.id}')
        assert response.status_code == 302
        assert not User.objects.filter(id=editor_user.id).exists()

    def test_cannot_delete_self(self, admin_client, admin_user):
        admin_client.post(f'/sunny/users/delete/{admin_user.id}')
        assert User.objects.filter(id=admin_user.id).exists()

    def test_refused_delete_is_logged_as_warning(self, admin_client, admin_user, caplog):
        with caplog.at_level(logging.INFO, logger='core.admin_pages'):
            admin_client.post(f'/sunny/users/delete/{admin_user.id}')

        records = [r for r in caplog.records if r.name == 'core.admin_pages']
        assert [r.levelno for r in records] == [logging.WARNING]


class TestCreateSiteAdminCommand:

    def test_creates_admin(self, db):
        call_command('create_site_admin', 'boss', 'boss@example.com', password='pw12345')
        user = User.objects.get(username='boss')
        assert user.role == 'admin'
        assert user.check_password('pw12345')

    def test_resets_existing(self, editor_user):
        call_command(
            'create_site_admin', 'editor', 'editor@example.com',
            password='changed', role='editor'
        )
        editor_user.refresh_from_db()
        assert editor_user.check_password('changed')
