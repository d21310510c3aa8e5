"""
Common middleware for Credit Gyems Academy
Request correlation for logs and API clients.
"""

import logging
import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from apps.common.logging import clear_request_context, set_request_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "HTTP_X_REQUEST_ID"
MAX_REQUEST_ID_LENGTH = 64

# ===============================================================================
# REQUEST ID MIDDLEWARE
# ===============================================================================


class RequestIDMiddleware:
    """Add unique request ID for tracing and logs"""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        # Honour an upstream ID (load balancer, storefront) when it looks sane
        incoming = request.META.get(REQUEST_ID_HEADER, "")
        if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.replace("-", "").isalnum():
            request_id = incoming
        else:
            request_id = str(uuid.uuid4())
        request.META["REQUEST_ID"] = request_id

        set_request_context(
            request_id=request_id,
            ip_address=request.META.get("REMOTE_ADDR"),
        )
        try:
            response = self.get_response(request)
        finally:
            clear_request_context()

        # Add to response headers for debugging
        response["X-Request-ID"] = request_id
        return response
