import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

from core.mixins import ErrorResponseMixin

logger = logging.getLogger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict with the current state of the resource."
    default_code = "conflict"


def _extract_message(data):
    if isinstance(data, dict) and set(data.keys()) == {"detail"}:
        return str(data["detail"])
    if isinstance(data, list) and len(data) == 1:
        return str(data[0])
    return data


def api_exception_handler(exc, context):
    """
    Renders every API error with the same body as ErrorResponseMixin.format_error.
    Exceptions DRF does not know about are logged and turned into a 500 without details.
    """
    request = context.get("request")
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled error in %s for %s",
            view.__class__.__name__ if view is not None else "<unknown view>",
            getattr(request, "path", "<unknown path>"),
        )
        return ErrorResponseMixin.format_error(
            request, 500, "Internal Server Error", "Something went wrong. Please try again later."
        )

    formatted = ErrorResponseMixin.format_error(
        request,
        response.status_code,
        ErrorResponseMixin.reason_phrase(response.status_code),
        _extract_message(response.data),
    )
    for header in ("WWW-Authenticate", "Retry-After"):
        if header in response:
            formatted[header] = response[header]
    return formatted
