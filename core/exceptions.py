"""
Project-wide DRF exception handler.

Every error leaves the API as ``{"success": false, "message": ...}``,
with field errors under ``errors`` when a validator produced them.
Validation maps to 400, missing rows to 404, auth to 401/403 and
everything else, database errors included, to 500.
"""
import structlog
from django.core.exceptions import ObjectDoesNotExist
from django.db import DatabaseError
from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _first_message(detail['detail'])
        for key, value in detail.items():
            msg = _first_message(value)
            return msg if key == 'non_field_errors' else f"{key}: {msg}"
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    view = context.get('view')
    if isinstance(exc, ProtectedError):
        return Response(
            {'success': False, 'message': 'Data masih dipakai oleh data lain dan tidak bisa dihapus.'},
            status=status.HTTP_400_BAD_REQUEST,
        )
    if isinstance(exc, ObjectDoesNotExist):
        return Response({'success': False, 'message': str(exc) or 'Data tidak ditemukan.'},
                        status=status.HTTP_404_NOT_FOUND)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        if isinstance(exc, DatabaseError):
            logger.error('database_error', view=getattr(view, '__name__', None) or repr(view), error=str(exc))
        else:
            logger.exception('unhandled_error', view=getattr(view, '__name__', None) or repr(view))
        return Response({'success': False, 'message': str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    body = {'success': False, 'message': _first_message(resp.data)}
    if isinstance(resp.data, dict) and 'detail' not in resp.data:
        body['errors'] = resp.data
    elif isinstance(resp.data, list):
        body['errors'] = resp.data
    resp.data = body
    return resp
