"""
Tests for contact intake, the status machine and admin message handling.
"""
from datetime import timedelta

import pytest
from django.db import DatabaseError
from django.utils import timezone
from rest_framework import status

from contact.models import ContactMessage, validate_status_transition
from contact.services import normalize_form, send_reply, submit_contact_form
from core.exceptions import StatusTransitionError, ValidationError

pytestmark = pytest.mark.django_db

CAMEL_CASE_FORM = {
    'firstName': 'Asha',
    'lastName': 'Rao',
    'email': 'asha@example.com',
    'phone': '9876543210',
    'service': 'Screen Repair',
    'message': 'My screen is cracked.',
}

SNAKE_CASE_FORM = {
    'first_name': 'Ravi',
    'last_name': 'Kumar',
    'email': 'ravi@example.com',
    'phone': '9123456780',
    'device_type': 'Samsung A52',
    'message': 'Phone does not charge.',
}


def make_message(email='asha@example.com', status=ContactMessage.Status.NEW, hours_ago=0):
    message = ContactMessage.objects.create(
        first_name='Asha', last_name='Rao', email=email, phone='1',
        message='Hello', status=status,
    )
    if hours_ago:
        ContactMessage.objects.filter(id=message.id).update(
            created_at=timezone.now() - timedelta(hours=hours_ago)
        )
        message.refresh_from_db()
    return message


class TestNormalizeForm:

    def test_camel_and_snake_case_agree(self):
        camel = normalize_form({'firstName': ' A ', 'lastName': 'B', 'service': 'S'})
        snake = normalize_form({'first_name': 'A', 'last_name': 'B', 'service_needed': 'S'})
        assert camel == snake

    def test_unknown_keys_dropped(self):
        form = normalize_form({'first_name': 'A', 'website': 'spam'})
        assert 'website' not in form
        assert form['phone'] == ''


class TestSubmitContactForm:

    def test_valid_submission_is_stored_and_mailed(self, mailoutbox):
        result = submit_contact_form(CAMEL_CASE_FORM)

        message = ContactMessage.objects.get()
        assert result.message == message
        assert message.status == ContactMessage.Status.NEW
        assert message.service_needed == 'Screen Repair'
        assert result.emails_sent is True
        assert len(mailoutbox) == 2

        customer, owner = mailoutbox
        assert customer.to == ['asha@example.com']
        assert owner.to == ['owner@example.com']
        assert owner.reply_to == ['asha@example.com']
        assert 'Screen Repair' in owner.body

    @pytest.mark.parametrize('missing', ['firstName', 'lastName', 'email', 'phone', 'message'])
    def test_required_fields(self, missing, mailoutbox):
        form = {**CAMEL_CASE_FORM, missing: '   '}
        with pytest.raises(ValidationError, match='required fields'):
            submit_contact_form(form)
        assert not ContactMessage.objects.exists()
        assert mailoutbox == []

    @pytest.mark.parametrize('email', ['plainaddress', 'a@b', 'a b@example.com', '@example.com'])
    def test_invalid_email(self, email):
        with pytest.raises(ValidationError, match='valid email'):
            submit_contact_form({**CAMEL_CASE_FORM, 'email': email})
        assert not ContactMessage.objects.exists()

    def test_mail_failure_keeps_message(self, smtp_down):
        result = submit_contact_form(CAMEL_CASE_FORM)

        assert ContactMessage.objects.count() == 1
        assert result.emails_sent is False
        assert result.email_result['customer_email']['success'] is False

    @pytest.mark.parametrize('field,length', [('firstName', 101), ('lastName', 101), ('phone', 51)])
    def test_overlong_fields_rejected(self, field, length, mailoutbox):
        with pytest.raises(ValidationError, match='at most'):
            submit_contact_form({**CAMEL_CASE_FORM, field: 'x' * length})
        assert not ContactMessage.objects.exists()
        assert mailoutbox == []

    def test_fields_at_their_limits_are_stored(self, mailoutbox):
        submit_contact_form({**CAMEL_CASE_FORM, 'firstName': 'a' * 100, 'phone': '9' * 50})
        assert ContactMessage.objects.get().first_name == 'a' * 100

    def test_service_falls_back_to_device_then_default(self, mailoutbox):
        submit_contact_form(SNAKE_CASE_FORM)
        assert 'Samsung A52' in mailoutbox[1].body

        submit_contact_form({**SNAKE_CASE_FORM, 'device_type': ''})
        assert 'General Inquiry' in mailoutbox[3].body

    def test_markup_is_escaped_in_html_mail(self, mailoutbox):
        submit_contact_form({**CAMEL_CASE_FORM, 'message': '<script>alert(1)</script>'})

        html, mimetype = mailoutbox[1].alternatives[0]
        assert mimetype == 'text/html'
        assert '<script>' not in html
        assert '&lt;script&gt;' in html


class TestContactSubmitEndpoint:

    def test_success(self, api_client, mailoutbox):
        response = api_client.post('/contact/submit', CAMEL_CASE_FORM, format='json')

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['success'] is True
        assert body['data'] == {'customerEmail': True, 'adminEmail': True}

    def test_validation_failure(self, api_client):
        response = api_client.post('/contact/submit', {'firstName': 'A'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            'success': False, 'message': 'Please fill in all required fields'
        }

    def test_mail_failure_still_succeeds(self, api_client, smtp_down):
        response = api_client.post('/contact/submit', CAMEL_CASE_FORM, format='json')

        body = response.json()
        assert response.status_code == status.HTTP_200_OK
        assert body['success'] is True
        assert 'may be delayed' in body['message']
        assert body['data'] == {'customerEmail': False, 'adminEmail': False}

    def test_partial_mail_failure_still_succeeds(self, api_client, customer_mail_down, mailoutbox):
        response = api_client.post('/contact/submit', CAMEL_CASE_FORM, format='json')

        body = response.json()
        assert response.status_code == status.HTTP_200_OK
        assert 'may be delayed' in body['message']
        assert body['data'] == {'customerEmail': False, 'adminEmail': True}
        assert ContactMessage.objects.count() == 1

    def test_overlong_name_is_a_bad_request(self, api_client):
        response = api_client.post(
            '/contact/submit', {**CAMEL_CASE_FORM, 'lastName': 'R' * 101}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            'success': False, 'message': 'Last name must be at most 100 characters'
        }

    def test_store_failure(self, api_client, monkeypatch, mailoutbox):
        def fail(**kwargs):
            raise DatabaseError('disk full')
        monkeypatch.setattr(ContactMessage.objects, 'create', fail)

        response = api_client.post('/contact/submit', CAMEL_CASE_FORM, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()['success'] is False
        assert mailoutbox == []


class TestLegacyContactEndpoint:

    def test_contact_page(self, client):
        response = client.get('/contact')
        assert response.status_code == 200
        assert b'contact-form' in response.content

    def test_form_post(self, client, mailoutbox):
        response = client.post('/contact', SNAKE_CASE_FORM)

        assert response.status_code == 200
        assert response.json()['success'] is True
        assert response.json()['emailSent'] is True
        assert ContactMessage.objects.get().device_type == 'Samsung A52'

    def test_json_post(self, client, mailoutbox):
        response = client.post('/contact', SNAKE_CASE_FORM, content_type='application/json')
        assert response.json()['success'] is True

    def test_failure_answers_200(self, client):
        response = client.post('/contact', {'first_name': 'Only'})

        assert response.status_code == 200
        assert response.json()['success'] is False
        assert not ContactMessage.objects.exists()

    def test_mail_failure_reports_email_not_sent(self, client, smtp_down):
        body = client.post('/contact', SNAKE_CASE_FORM).json()
        assert body['success'] is True
        assert body['emailSent'] is False


class TestStatusMachine:

    def test_legal_moves(self):
        assert validate_status_transition('new', 'read')
        assert validate_status_transition('new', 'replied')
        assert validate_status_transition('read', 'replied')

    @pytest.mark.parametrize('current,new', [('replied', 'read'), ('replied', 'new'), ('read', 'new')])
    def test_illegal_moves(self, current, new):
        with pytest.raises(StatusTransitionError):
            validate_status_transition(current, new)

    def test_mark_read(self):
        message = make_message()
        assert message.mark_read() is True
        message.refresh_from_db()
        assert message.status == 'read'

    def test_mark_read_never_moves_back(self):
        message = make_message(status=ContactMessage.Status.REPLIED)
        assert message.mark_read() is False
        message.refresh_from_db()
        assert message.status == 'replied'


class TestSendReply:

    def test_marks_recent_messages_from_sender(self, mailoutbox):
        recent = make_message()
        read = make_message(status=ContactMessage.Status.READ, hours_ago=3)
        stale = make_message(hours_ago=30)
        other = make_message(email='someone@example.com')

        result = send_reply('asha@example.com', 'Re: screen', 'It is ready.', include_signature=False)

        assert result['success'] is True
        assert result['updated'] == 2
        assert result['message_id']
        statuses = {m.id: m.status for m in ContactMessage.objects.all()}
        assert statuses[recent.id] == 'replied'
        assert statuses[read.id] == 'replied'
        assert statuses[stale.id] == 'new'
        assert statuses[other.id] == 'new'
        assert mailoutbox[0].body == 'It is ready.'

    def test_named_message_is_marked_even_outside_window(self, mailoutbox):
        stale = make_message(hours_ago=72)

        result = send_reply('asha@example.com', 'Re', 'Hi', False, message_id=stale.id)

        assert result['updated'] == 1
        stale.refresh_from_db()
        assert stale.status == 'replied'

    def test_signature_appended(self, mailoutbox, settings):
        settings.REPLY_SIGNATURE = 'Sunny\nMobile Doctor'
        send_reply('asha@example.com', 'Re', 'Hello', include_signature=True)

        assert mailoutbox[0].body == 'Hello\n\n---\nSunny\nMobile Doctor'
        html, _ = mailoutbox[0].alternatives[0]
        assert 'Hello<br><br>---<br>Sunny' in html

    def test_mail_failure_changes_nothing(self, smtp_down):
        message = make_message()

        result = send_reply('asha@example.com', 'Re', 'Hi', False)

        assert result['success'] is False
        assert 'error' in result
        message.refresh_from_db()
        assert message.status == 'new'


class TestMessageAdmin:

    def test_list_newest_first(self, editor_client):
        older = make_message(hours_ago=5)
        newer = make_message()

        response = editor_client.get('/sunny/messages')
        assert response.context['messages_list'] == [newer, older]

    def test_mark_read_redirects(self, editor_client):
        message = make_message()
        response = editor_client.post(f'/sunny/messages/read/{message.id}')

        assert response['Location'] == '/sunny/messages'
        message.refresh_from_db()
        assert message.status == 'read'

    def test_mark_read_api(self, editor_client):
        message = make_message()
        response = editor_client.post(f'/sunny/messages/read-api/{message.id}')

        assert response.status_code == 200
        assert response.json() == {'success': True}
        message.refresh_from_db()
        assert message.status == 'read'

    def test_mark_read_api_requires_session(self, client):
        message = make_message()
        response = client.post(f'/sunny/messages/read-api/{message.id}')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()['success'] is False

    def test_delete(self, editor_client):
        message = make_message()
        editor_client.post(f'/sunny/messages/delete/{message.id}')
        assert not ContactMessage.objects.exists()

    def test_send_email_reply(self, editor_client, mailoutbox):
        message = make_message()

        response = editor_client.post('/sunny/send-email-reply', {
            'to': 'asha@example.com',
            'subject': 'Your phone',
            'message': 'Ready for pickup.',
            'includeSignature': True,
            'messageId': str(message.id),
        }, content_type='application/json')

        body = response.json()
        assert response.status_code == 200
        assert body['success'] is True
        assert body['updated'] == 1
        assert body['messageId']
        assert mailoutbox[0].subject == 'Your phone'

    def test_send_email_reply_mail_failure(self, editor_client, smtp_down):
        make_message()
        response = editor_client.post('/sunny/send-email-reply', {
            'to': 'asha@example.com', 'subject': 'S', 'message': 'M',
        }, content_type='application/json')

        assert response.json()['success'] is False
        assert ContactMessage.objects.get().status == 'new'

    def test_send_email_reply_validates(self, editor_client):
        response = editor_client.post('/sunny/send-email-reply', {
            'to': 'not-an-email', 'subject': 'S', 'message': 'M',
        }, content_type='application/json')

        assert response.status_code == 400
        assert response.json()['success'] is False


class TestEmailCheckEndpoint:

    def test_admin_only(self, editor_client):
        response = editor_client.get('/contact/test-email')
        assert response.status_code == 403
        assert response.json()['success'] is False

    def test_anonymous(self, client):
        assert client.get('/contact/test-email').status_code == 401

    def test_admin(self, admin_client):
        response = admin_client.get('/contact/test-email')
        assert response.status_code == 200
        assert response.json()['success'] is True
