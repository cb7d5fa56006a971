import logging

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.utils import IntegrityError, OperationalError, ProgrammingError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error
from rest_framework.views import exception_handler

from orders.services.errors import OrderError

from .responses import error_payload

LOGGER = logging.getLogger(__name__)


def _first_message(detail):
    if isinstance(detail, dict):
        if "detail" in detail:
            return _first_message(detail["detail"])
        for value in detail.values():
            return _first_message(value)
    if isinstance(detail, (list, tuple)) and detail:
        return _first_message(detail[0])
    return str(detail)


def _with_debug(payload, exc):
    if settings.DEBUG:
        payload["error"] = repr(exc)
    return payload


def _describe(context):
    request = context.get("request")
    if request is None:
        return "(no request in context)"
    return f"{request.method} {request.get_full_path()}"


def custom_exception_handler(exc, context):
    """
    Every failure leaves as {"success": false, "message", "code"}, plus
    "errors" for field validation and "error" (diagnostics) when DEBUG is on.
    """
    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(detail=as_serializer_error(exc))

    if isinstance(exc, OrderError):
        payload = error_payload(exc.message, exc.code)
        return Response(_with_debug(payload, exc), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, exceptions.ValidationError):
            payload = error_payload(_first_message(response.data), "validation_error", errors=response.data)
        else:
            code = getattr(exc, "default_code", "error")
            payload = error_payload(_first_message(response.data), code)
        response.data = _with_debug(payload, exc)
        return response

    if isinstance(exc, IntegrityError):
        LOGGER.warning("Integrity error on %s: %s", _describe(context), exc)
        return Response(
            _with_debug(error_payload("Conflicting write, please retry.", "conflict"), exc),
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, (OperationalError, ProgrammingError)):
        LOGGER.exception("Database error on %s", _describe(context))
        return Response(
            _with_debug(
                error_payload("Database unavailable. Please try again shortly.", "db_unavailable"), exc
            ),
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    LOGGER.exception("Unhandled error on %s", _describe(context))
    return Response(
        _with_debug(error_payload("Internal Server Error", "server_error"), exc),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
