"""
JSON failure envelope for every DRF view: ``{"success": false, "error": ...}``.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .exceptions import AuthError, SiteError, StoreError, ValidationError

logger = logging.getLogger(__name__)


def exception_handler(exc, context):
    if isinstance(exc, SiteError):
        if isinstance(exc, ValidationError):
            code = status.HTTP_400_BAD_REQUEST
        elif isinstance(exc, AuthError):
            code = status.HTTP_403_FORBIDDEN
        else:
            code = status.HTTP_500_INTERNAL_SERVER_ERROR
        if isinstance(exc, StoreError):
            logger.error(f"API store error in {context['view'].__class__.__name__}: {exc}")
        return Response({'success': False, 'error': exc.message}, status=code)

    response = drf_exception_handler(exc, context)
    if response is not None:
        detail = response.data.get('detail') if isinstance(response.data, dict) else None
        response.data = {
            'success': False,
            'error': str(detail) if detail is not None else 'Validation failed',
            **({'fields': response.data} if detail is None else {}),
        }
    return response
