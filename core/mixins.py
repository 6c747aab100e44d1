from http import HTTPStatus

from rest_framework.response import Response


class ErrorResponseMixin:
    @staticmethod
    def format_error(request, status_code, error, message):
        return Response(
            {
                "status": status_code,
                "error": error,
                "message": message,
                "path": request.path if request is not None else "",
            },
            status=status_code,
        )

    @staticmethod
    def reason_phrase(status_code):
        try:
            return HTTPStatus(status_code).phrase
        except ValueError:
            return "Error"
