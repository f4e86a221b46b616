"""
Contact message handling in the admin panel (editors and admins).
"""
import logging

from django.shortcuts import redirect
from django.views.decorators.http import require_GET, require_POST
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.authentication import AdminSessionAuthentication
from accounts.gates import IsSessionEditor, gated, require_editor
from core.admin_pages import admin_render, redirect_with_error, site_error_response
from core.exceptions import StoreError, ValidationError, store_errors
from .models import ContactMessage
from .serializers import EmailReplySerializer
from .services import send_reply

logger = logging.getLogger(__name__)


@gated(require_editor)
@require_GET
def messages_list(request):
    try:
        with store_errors('load messages'):
            items = list(ContactMessage.objects.all())
    except StoreError as e:
        return site_error_response(request, e, 'Failed to load messages')

    return admin_render(request, 'admin/messages.html', {
        'title': 'Manage Messages',
        'messages_list': items,
    }, 'messages')


@gated(require_editor)
@require_POST
def message_read(request, id):
    try:
        with store_errors('mark message read'):
            message = ContactMessage.objects.filter(id=id).first()
            if message is not None:
                message.mark_read()
    except StoreError as e:
        return redirect_with_error(request, 'panel:messages', e, 'Failed to update message')
    return redirect('panel:messages')


@gated(require_editor)
@require_POST
def message_delete(request, id):
    try:
        with store_errors('delete message'):
            ContactMessage.objects.filter(id=id).delete()
    except StoreError as e:
        return redirect_with_error(request, 'panel:messages', e, 'Failed to delete message')
    return redirect('panel:messages')


class AdminAPIView(APIView):
    """JSON endpoint for the admin page scripts."""

    authentication_classes = [AdminSessionAuthentication]
    permission_classes = [IsSessionEditor]


class MessageReadAPIView(AdminAPIView):
    """POST messages/read-api/<id>"""

    def post(self, request, id):
        with store_errors('mark message read'):
            message = ContactMessage.objects.filter(id=id).first()
            if message is None:
                return Response(
                    {'success': False, 'error': 'Message not found'},
                    status=status.HTTP_404_NOT_FOUND
                )
            message.mark_read()
        return Response({'success': True})


class SendEmailReplyView(AdminAPIView):
    """
    POST send-email-reply

    Body: to, subject, message, includeSignature, messageId (optional).
    """

    def post(self, request):
        serializer = EmailReplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            result = send_reply(
                to=data['to'],
                subject=data['subject'],
                message=data['message'],
                include_signature=data['includeSignature'],
                message_id=data['messageId'],
            )
        except ValidationError as e:
            return Response(
                {'success': False, 'error': e.message},
                status=status.HTTP_400_BAD_REQUEST
            )

        if not result['success']:
            return Response({'success': False, 'error': result['error']})

        logger.info(f"{request.user.username} replied to {data['to']}")
        return Response({
            'success': True,
            'messageId': result['message_id'],
            'updated': result['updated'],
        })
