"""
Contact intake and reply services.

submit_contact_form: validate, persist, then send the two contact emails.
send_reply: email a customer from the admin panel and mark their recent
inquiries as replied.
"""
import logging
import re
from typing import Dict, NamedTuple, Optional

from django.conf import settings
from django.utils import timezone

from core.email_service import EmailService
from core.exceptions import ValidationError, store_errors
from .models import ContactMessage

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

FORM_FIELDS = (
    'first_name', 'last_name', 'email', 'phone',
    'device_type', 'service_needed', 'message',
)
REQUIRED_FIELDS = ('first_name', 'last_name', 'email', 'phone', 'message')

# camelCase keys sent by the contact page script
FIELD_ALIASES = {
    'firstName': 'first_name',
    'lastName': 'last_name',
    'deviceType': 'device_type',
    'service': 'service_needed',
    'serviceNeeded': 'service_needed',
}


class IntakeResult(NamedTuple):
    message: ContactMessage
    email_result: Dict

    @property
    def emails_sent(self):
        return self.email_result['success']


def normalize_form(data) -> Dict[str, str]:
    """
    Map either payload shape onto the snake_case form, trimming every value.

    Unknown keys are dropped; missing keys become empty strings.
    """
    form = dict.fromkeys(FORM_FIELDS, '')
    for key, value in data.items():
        field = FIELD_ALIASES.get(key, key)
        if field in form and value is not None:
            form[field] = str(value).strip()
    return form


def validate_form(form: Dict[str, str]) -> None:
    if any(not form[field] for field in REQUIRED_FIELDS):
        raise ValidationError('Please fill in all required fields')
    if not EMAIL_PATTERN.match(form['email']):
        raise ValidationError('Please enter a valid email address')
    for field in FORM_FIELDS:
        limit = ContactMessage._meta.get_field(field).max_length
        if limit and len(form[field]) > limit:
            label = ContactMessage._meta.get_field(field).verbose_name
            raise ValidationError(f'{label.capitalize()} must be at most {limit} characters')


def mail_payload(message: ContactMessage) -> Dict[str, str]:
    return {
        'first_name': message.first_name,
        'last_name': message.last_name,
        'email': message.email,
        'phone': message.phone,
        'service': message.service_label,
        'message': message.message,
    }


def submit_contact_form(data, email_service: Optional[EmailService] = None) -> IntakeResult:
    """
    Accept a contact form submission.

    Raises:
        ValidationError: Missing, malformed or overlong field; nothing is stored
        StoreError: The message could not be saved; no email is sent
    """
    form = normalize_form(data)
    validate_form(form)

    with store_errors('save contact message'):
        message = ContactMessage.objects.create(**form)
    logger.info(f"Contact message {message.id} received from {message.email}")

    email_service = email_service or EmailService()
    email_result = email_service.send_contact_emails(mail_payload(message))
    if not email_result['success']:
        logger.warning(
            f"Contact message {message.id} stored but confirmation emails failed"
        )

    return IntakeResult(message, email_result)


def reply_text(message: str, include_signature: bool) -> str:
    if include_signature:
        return f"{message}\n\n---\n{settings.REPLY_SIGNATURE}"
    return message


def send_reply(to, subject, message, include_signature, message_id=None,
               email_service: Optional[EmailService] = None) -> Dict:
    """
    Email ``to`` and, once the relay accepted it, mark as replied every
    message from that address received within REPLY_MATCH_WINDOW_HOURS,
    plus the message ``message_id`` if given.

    Returns the mailer result with an ``updated`` count on success.
    """
    if not EMAIL_PATTERN.match(to or ''):
        raise ValidationError('Please enter a valid email address')
    if not subject or not message:
        raise ValidationError('Subject and message are required')

    email_service = email_service or EmailService()
    result = email_service.send_direct_email(to, subject, reply_text(message, include_signature))
    if not result['success']:
        return result

    now = timezone.now()
    with store_errors('mark messages replied'):
        matched = ContactMessage.objects.unreplied().recent_from(to, now)
        ids = set(matched.values_list('id', flat=True))
        if message_id:
            ids.update(
                ContactMessage.objects.unreplied()
                .filter(id=message_id)
                .values_list('id', flat=True)
            )
        updated = ContactMessage.objects.filter(id__in=ids).update(
            status=ContactMessage.Status.REPLIED,
            updated_at=now,
        )

    logger.info(f"Reply sent to {to}; {updated} message(s) marked replied")
    return {**result, 'updated': updated}
