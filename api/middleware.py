"""
API Middleware - Request tracing for the Abako API

RequestIDMiddleware generates (or accepts from upstream) a request ID,
exposes it as ``request.request_id``, binds it to the logging context and
echoes it back in the ``X-Request-ID`` response header.
"""

import logging
import uuid

from django.http import HttpRequest, HttpResponse
from django.utils.deprecation import MiddlewareMixin

from core.logging import reset_current_request_id, set_current_request_id

logger = logging.getLogger(__name__)


class RequestIDMiddleware(MiddlewareMixin):
    """
    Middleware that attaches a unique request ID to each request.

    Usage in settings.py:
        MIDDLEWARE = [
            'api.middleware.RequestIDMiddleware',
            ...
        ]
    """

    REQUEST_ID_HEADER = 'HTTP_X_REQUEST_ID'
    RESPONSE_HEADER = 'X-Request-ID'

    def process_request(self, request: HttpRequest) -> None:
        request_id = request.META.get(self.REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.request_id = request_id
        request._request_id_token = set_current_request_id(request_id)

        logger.debug(f"Request {request_id}: {request.method} {request.path}")

    def process_response(
        self, request: HttpRequest, response: HttpResponse
    ) -> HttpResponse:
        request_id = getattr(request, 'request_id', None)

        if request_id:
            response[self.RESPONSE_HEADER] = request_id

        token = getattr(request, '_request_id_token', None)
        if token is not None:
            reset_current_request_id(token)

        return response
