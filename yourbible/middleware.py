import logging
import time

logger = logging.getLogger("yourbible.requests")


class RequestLogMiddleware:
    """One access-log line per request: method, path, status, duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info("%s %s %s %.1fms", request.method, request.get_full_path(), response.status_code, elapsed_ms)
        return response
