"""Core middleware for Storefront."""

import logging

from django.http import JsonResponse

from .exceptions import ApiError

logger = logging.getLogger(__name__)

API_PREFIX = "/api/"


class ApiErrorMiddleware:
    """Render exceptions raised by API views as JSON error bodies.

    ApiError subclasses carry their own status code. Anything else raised
    under /api/ is logged and turned into a generic 500 so API clients never
    receive an HTML error page.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if isinstance(exception, ApiError):
            return JsonResponse(exception.as_dict(), status=exception.status_code)

        if not request.path.startswith(API_PREFIX):
            return None

        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return JsonResponse({"message": "Internal server error"}, status=500)
