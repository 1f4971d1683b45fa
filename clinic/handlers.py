"""
Project-wide DRF exception handler.

Every error leaves the API as ``{'success': False, 'message': ..., 'code': ...}``.
Unexpected exceptions are logged with their traceback and answered with a
generic 500 so that internals never reach the client.

Kept apart from ``clinic.exceptions``: importing ``rest_framework.views``
resolves the authentication classes, which themselves import the domain
errors.
"""
import logging

from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from clinic.logging_utils import get_request_id

logger = logging.getLogger(__name__)


def _first_message(detail):
    """Flatten DRF error details into one human readable line."""
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _first_message(detail['detail'])
        for field, value in detail.items():
            msg = _first_message(value)
            return msg if field == 'non_field_errors' else f'{field}: {msg}'
        return 'Invalid request'
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else 'Invalid request'
    return str(detail)


def _error_code(exc, resp) -> str:
    if isinstance(exc, ValidationError):
        return 'ValidationError'
    codes = exc.get_codes() if isinstance(exc, APIException) else None
    if isinstance(codes, str):
        return codes
    return 'api_error' if resp.status_code < 500 else 'server_error'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.exception('Unhandled error on %s', getattr(request, 'path', '?'), exc_info=exc)
        return Response({
            'success': False,
            'message': 'Internal server error',
            'code': 'server_error',
            'requestId': get_request_id(),
        }, status=500)
    message = _first_message(resp.data)
    body = {'success': False, 'message': message, 'code': _error_code(exc, resp)}
    if isinstance(exc, ValidationError) and isinstance(resp.data, dict):
        body['errors'] = resp.data
    resp.data = body
    return resp
