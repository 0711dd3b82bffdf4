# core/api.py
import logging

from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def flatten_validation_errors(detail, prefix=''):
    """
    Turns DRF's nested error structure into a flat list of
    {'field': 'a.b', 'message': '...'} entries.
    """
    if isinstance(detail, dict):
        for key, value in detail.items():
            field = f"{prefix}.{key}" if prefix else str(key)
            yield from flatten_validation_errors(value, field)
    elif isinstance(detail, list):
        for index, item in enumerate(detail):
            if isinstance(item, (dict, list)):
                nested = f"{prefix}.{index}" if prefix else str(index)
                yield from flatten_validation_errors(item, nested)
            else:
                yield {'field': prefix, 'message': str(item)}
    else:
        yield {'field': prefix, 'message': str(detail)}


def _resource_name(view):
    queryset = getattr(view, 'queryset', None)
    if queryset is not None:
        return str(queryset.model._meta.verbose_name).capitalize()
    return getattr(view, 'resource_name', 'Resource')


def exception_handler(exc, context):
    """
    Every API error is answered as {"error": ...}; validation errors also
    carry field-level "details".
    """
    view = context.get('view')

    if isinstance(exc, exceptions.ValidationError):
        return Response(
            {'error': 'Validation error', 'details': list(flatten_validation_errors(exc.detail))},
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, Http404):
        return Response({'error': f"{_resource_name(view)} not found"}, status=status.HTTP_404_NOT_FOUND)

    response = drf_exception_handler(exc, context)
    if response is None:
        logger.error("Unhandled API error in %s: %s", view.__class__.__name__ if view else 'unknown view', exc,
                     exc_info=exc)
        return Response(
            {'error': 'An unexpected error occurred'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'error': str(response.data['detail'])}
    return response
