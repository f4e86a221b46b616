"""
Tests for the mailer, the admin dashboard and configuration helpers.
"""
import pytest
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError

from cms.models import Post, GalleryItem, YouTubeVideo, Service
from contact.models import ContactMessage
from core.email_service import EmailService
from core.exceptions import StoreError, store_errors
from core.settings import require_env

CUSTOMER = {
    'first_name': 'Asha',
    'last_name': 'Rao',
    'email': 'asha@example.com',
    'phone': '9876543210',
    'service': 'Battery',
    'message': 'Drains fast.\nPlease help.',
}


class TestEmailService:

    def test_customer_auto_reply(self, mailoutbox):
        result = EmailService().send_customer_auto_reply(CUSTOMER)

        assert result['success'] is True
        assert result['message_id'].startswith('<')
        email = mailoutbox[0]
        assert email.to == ['asha@example.com']
        assert email.subject.startswith('Thank you for contacting')
        assert email.extra_headers['Message-ID'] == result['message_id']
        assert 'Dear Asha Rao' in email.body

    def test_admin_notification(self, mailoutbox, settings):
        settings.CONTACT_EMAIL_TO = 'shop@example.com'
        EmailService().send_admin_notification(CUSTOMER)

        email = mailoutbox[0]
        assert email.to == ['shop@example.com']
        assert email.reply_to == ['asha@example.com']
        assert 'Drains fast.' in email.body

    def test_contact_emails_both_sent(self, mailoutbox):
        result = EmailService().send_contact_emails(CUSTOMER)

        assert result['success'] is True
        assert result['customer_email']['success'] is True
        assert result['admin_email']['success'] is True
        assert len(mailoutbox) == 2

    def test_relay_failure_is_returned_not_raised(self, smtp_down):
        result = EmailService().send_contact_emails(CUSTOMER)

        assert result['success'] is False
        assert result['customer_email'] == {
            'success': False, 'error': 'Connection unexpectedly closed'
        }

    def test_partial_failure_reports_each_send(self, customer_mail_down, mailoutbox, settings):
        result = EmailService().send_contact_emails(CUSTOMER)

        assert result['success'] is False
        assert result['customer_email']['success'] is False
        assert result['admin_email']['success'] is True
        assert [email.to for email in mailoutbox] == [[settings.CONTACT_EMAIL_TO]]

    def test_os_error_is_returned(self, monkeypatch):
        def unreachable(self, messages):
            raise ConnectionRefusedError('Connection refused')
        monkeypatch.setattr(
            'django.core.mail.backends.locmem.EmailBackend.send_messages', unreachable
        )

        result = EmailService().send_direct_email('a@example.com', 'S', 'T')

        assert result['success'] is False
        assert 'refused' in result['error']

    def test_direct_email_html_defaults_to_text(self, mailoutbox):
        EmailService().send_direct_email('a@example.com', 'Hello', 'Line one\nLine <two>')

        html, _ = mailoutbox[0].alternatives[0]
        assert html == 'Line one<br>Line &lt;two&gt;'

    def test_verify_connection(self):
        assert EmailService().verify_connection()['success'] is True


@pytest.mark.django_db
class TestDashboard:

    def test_counts_and_recent_items(self, editor_client):
        for i in range(7):
            Post.objects.create(title=f'Post {i}', content='x', author='a')
        GalleryItem.objects.create(title='Pic', image='/p.gif', category='c')
        YouTubeVideo.objects.create(title='V', video_id='v')
        Service.objects.create(name='S')
        ContactMessage.objects.create(first_name='A', last_name='B', email='a@example.com', phone='1', message='m')
        ContactMessage.objects.create(
            first_name='C', last_name='D', email='c@example.com', phone='1', message='m', status='read'
        )

        response = editor_client.get('/sunny/dashboard')

        assert response.status_code == 200
        assert response.context['stats'] == {
            'posts': 7, 'gallery': 1, 'videos': 1, 'services': 1, 'messages': 1,
        }
        assert len(response.context['recent_posts']) == 5
        assert len(response.context['recent_messages']) == 2


class TestConfiguration:

    def test_missing_required_variable(self, monkeypatch):
        monkeypatch.delenv('SMTP_HOST', raising=False)
        with pytest.raises(ImproperlyConfigured, match='SMTP_HOST'):
            require_env('SMTP_HOST')

    def test_present_variable(self, monkeypatch):
        monkeypatch.setenv('SMTP_HOST', 'smtp.example.com')
        assert require_env('SMTP_HOST') == 'smtp.example.com'

    def test_store_errors_wraps_database_errors(self):
        with pytest.raises(StoreError) as error:
            with store_errors('load posts'):
                raise DatabaseError('gone')
        assert error.value.message == 'Failed to load posts'
        assert isinstance(error.value.__cause__, DatabaseError)
