from __future__ import annotations

import logging
import traceback
from datetime import datetime, timezone as dt_timezone

from django.conf import settings
from django.http import JsonResponse
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ApiError(drf_exceptions.APIException):
    """An error with an HTTP status code and a message meant for the client."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal Server Error"

    def __init__(self, message: str | None = None, status_code: int | None = None, details=None):
        super().__init__(detail=message or self.default_detail)
        if status_code is not None:
            self.status_code = status_code
        self.message = str(self.detail)
        self.details = details


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad Request"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not Found"


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal Server Error"


def create_error_response(status_code: int, message: str, details=None) -> dict:
    body = {
        "status": "error",
        "statusCode": status_code,
        "message": message,
        "timestamp": datetime.now(dt_timezone.utc).isoformat().replace("+00:00", "Z"),
    }
    if details is not None:
        body["details"] = details
    return body


def _describe(exc: Exception, response: Response | None) -> tuple[int, str, object]:
    if isinstance(exc, ApiError):
        return exc.status_code, exc.message, exc.details
    if response is not None:
        detail = getattr(exc, "detail", None)
        # DRF validation errors carry a dict/list of field errors
        if isinstance(detail, (dict, list)):
            return response.status_code, "Invalid request", response.data
        return response.status_code, str(detail or response.status_text), None
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", None


def api_exception_handler(exc, context):
    """DRF ``EXCEPTION_HANDLER``: every error leaves the API as the same JSON envelope."""
    response = exception_handler(exc, context)
    status_code, message, details = _describe(exc, response)

    request = context.get("request")
    where = f"{request.method} {request.get_full_path()}" if request is not None else "-"
    if status_code >= 500:
        logger.error("[ERROR] %s - %s (%s)", status_code, message, where, exc_info=exc)
        if settings.DEBUG and details is None:
            details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    else:
        logger.warning("[ERROR] %s - %s (%s)", status_code, message, where)

    body = create_error_response(status_code, message, details)
    if response is not None:
        response.data = body
        return response
    return Response(body, status=status_code)


def not_found_view(request, exception=None):
    """``handler404`` for paths no url pattern matches."""
    message = f"Resource not found - {request.get_full_path()}"
    logger.warning("[ERROR] 404 - %s", message)
    return JsonResponse(create_error_response(404, message), status=404)


def server_error_view(request):
    """``handler500`` for failures outside DRF views."""
    return JsonResponse(create_error_response(500, "Internal Server Error"), status=500)
