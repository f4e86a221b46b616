"""
Contact Management Views

Public contact form endpoints plus the admin-only relay check.
"""
import json
import logging

from django.http import JsonResponse
from django.shortcuts import render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.gates import gated, require_admin
from cms.views import page_title
from core.email_service import EmailService
from core.exceptions import StoreError, ValidationError
from .services import submit_contact_form

logger = logging.getLogger(__name__)

THANK_YOU = 'Thank you for your message! We will get back to you soon.'
EMAILS_DELAYED = (
    'Thank you for your message! We received it, but confirmation emails '
    'may be delayed. We will contact you soon.'
)
SUBMIT_FAILED = 'An error occurred while processing your request. Please try again.'


class ContactSubmitView(APIView):
    """
    POST /contact/submit

    JSON or form body with camelCase keys (firstName, lastName, email,
    phone, service, message).
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        try:
            result = submit_contact_form(request.data)
        except ValidationError as e:
            return Response(
                {'success': False, 'message': e.message},
                status=status.HTTP_400_BAD_REQUEST
            )
        except StoreError as e:
            logger.error(f"Contact form error: {e}")
            return Response(
                {'success': False, 'message': SUBMIT_FAILED},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        email_result = result.email_result
        return Response({
            'success': True,
            'message': THANK_YOU if result.emails_sent else EMAILS_DELAYED,
            'data': {
                'customerEmail': email_result['customer_email']['success'],
                'adminEmail': email_result['admin_email']['success'],
            }
        })


def request_payload(request):
    """Form fields, or the decoded body for JSON posts."""
    if request.content_type == 'application/json':
        try:
            payload = json.loads(request.body or b'{}')
        except ValueError:
            raise ValidationError('Malformed JSON body')
        if not isinstance(payload, dict):
            raise ValidationError('Malformed JSON body')
        return payload
    return request.POST


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def contact(request):
    """
    GET renders the contact page. POST is the legacy snake_case
    submission; it always answers 200 with a ``success`` flag.
    """
    if request.method == 'GET':
        return render(request, 'contact.html', {'title': page_title('Contact Us')})

    try:
        result = submit_contact_form(request_payload(request))
    except ValidationError as e:
        return JsonResponse({'success': False, 'message': e.message})
    except StoreError as e:
        logger.error(f"Contact form error: {e}")
        return JsonResponse({
            'success': False,
            'message': 'Failed to send message. Please try again.'
        })

    return JsonResponse({
        'success': True,
        'message': 'Message sent successfully! Check your email for confirmation.',
        'emailSent': result.emails_sent,
    })


@require_GET
@gated(require_admin, json=True)
def test_email(request):
    """GET /contact/test-email - open and close an SMTP connection."""
    result = EmailService().verify_connection()
    return JsonResponse(result, status=200 if result['success'] else 500)
