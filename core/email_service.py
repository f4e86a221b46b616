"""
Transactional email over the configured SMTP relay.

Sends the two contact-form emails (customer auto-reply and owner
notification) and the direct replies written from the admin panel.
Relay failures never propagate: every send returns a result dict with
``success`` and either ``message_id`` or ``error``.
"""
from email.utils import make_msgid
import logging
import smtplib
from typing import Dict, Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.core.mail.utils import DNS_NAME
from django.template.defaultfilters import linebreaksbr
from django.template.loader import render_to_string
from django.utils import timezone

logger = logging.getLogger(__name__)


class EmailService:
    """
    Stateless wrapper around Django's mail API.

    Usage:
        service = EmailService()
        result = service.send_contact_emails({
            'first_name': 'Asha', 'last_name': 'Rao', 'email': 'asha@example.com',
            'phone': '98765', 'service': 'Screen Repair', 'message': 'Cracked screen',
        })
    """

    CUSTOMER_SUBJECT = 'Thank you for contacting {business}'
    ADMIN_SUBJECT = 'New Customer Inquiry - {business}'

    def __init__(self):
        self.business_name = settings.BUSINESS_NAME
        self.sender = settings.EMAIL_HOST_USER or settings.DEFAULT_FROM_EMAIL
        self.admin_email = settings.CONTACT_EMAIL_TO

    def _from(self, label):
        return f'"{label}" <{self.sender}>'

    def _context(self, customer_data):
        return {
            **customer_data,
            'business_name': self.business_name,
            'business_tagline': settings.BUSINESS_TAGLINE,
            'business_phone': settings.BUSINESS_PHONE,
            'business_address': settings.BUSINESS_ADDRESS,
            'business_owner': settings.BUSINESS_OWNER,
            'business_hours': settings.BUSINESS_HOURS,
            'inquiry_date': timezone.localtime(),
        }

    def _send(self, kind: str, subject: str, text: str, to: str,
              from_email: str, html: Optional[str] = None,
              reply_to: Optional[str] = None) -> Dict:
        """Send one message and convert relay failures into a result dict."""
        message_id = make_msgid(domain=DNS_NAME)
        email = EmailMultiAlternatives(
            subject=subject,
            body=text,
            from_email=from_email,
            to=[to],
            reply_to=[reply_to] if reply_to else None,
            headers={'Message-ID': message_id},
        )
        if html:
            email.attach_alternative(html, 'text/html')

        try:
            email.send(fail_silently=False)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending {kind} to {to}: {e}")
            return {'success': False, 'error': str(e)}
        except Exception as e:
            logger.error(f"Unexpected error sending {kind} to {to}: {str(e)}")
            return {'success': False, 'error': f'Unexpected error: {str(e)}'}

        logger.info(f"Sent {kind} to {to}. MessageId: {message_id}")
        return {'success': True, 'message_id': message_id}

    def send_customer_auto_reply(self, customer_data: Dict) -> Dict:
        """Confirm receipt of an inquiry to the customer."""
        context = self._context(customer_data)
        return self._send(
            kind='customer auto-reply',
            subject=self.CUSTOMER_SUBJECT.format(business=self.business_name),
            text=render_to_string('emails/customer_auto_reply.txt', context),
            html=render_to_string('emails/customer_auto_reply.html', context),
            to=customer_data['email'],
            from_email=self._from(self.business_name),
        )

    def send_admin_notification(self, customer_data: Dict) -> Dict:
        """Forward the full inquiry to the owner's notification address."""
        context = self._context(customer_data)
        return self._send(
            kind='admin notification',
            subject=self.ADMIN_SUBJECT.format(business=self.business_name),
            text=render_to_string('emails/admin_notification.txt', context),
            html=render_to_string('emails/admin_notification.html', context),
            to=self.admin_email,
            from_email=self._from(f'{self.business_name} Website'),
            reply_to=customer_data['email'],
        )

    def send_contact_emails(self, customer_data: Dict) -> Dict:
        """
        Send the auto-reply and the owner notification, in that order.

        Each send is independent; ``success`` is true only when both went out.
        """
        customer_result = self.send_customer_auto_reply(customer_data)
        admin_result = self.send_admin_notification(customer_data)
        return {
            'customer_email': customer_result,
            'admin_email': admin_result,
            'success': customer_result['success'] and admin_result['success'],
        }

    def send_direct_email(self, to: str, subject: str, text: str,
                          html: Optional[str] = None) -> Dict:
        """Send a free-form email, used for admin replies to inquiries."""
        if html is None:
            html = linebreaksbr(text, autoescape=True)
        return self._send(
            kind='direct email',
            subject=subject,
            text=text,
            html=html,
            to=to,
            from_email=self._from(self.business_name),
        )

    def verify_connection(self) -> Dict:
        """Open and close a relay connection to check the SMTP settings."""
        try:
            connection = get_connection(fail_silently=False)
            connection.open()
            connection.close()
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Email configuration error: {e}")
            return {'success': False, 'error': str(e)}
        return {'success': True, 'message': 'Email configuration is valid'}
