import uuid

from .logging_utils import bind_request_id, reset_request_id


class RequestIdMiddleware:
    """Tag each request with an id for log correlation.

    An incoming ``X-Request-ID`` header is honoured when present (and
    reasonably short); otherwise a fresh hex uuid is generated.  The id
    is echoed back on the response.
    """
    HEADER = 'X-Request-ID'

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        incoming = (request.headers.get(self.HEADER) or '').strip()
        request_id = incoming if 0 < len(incoming) <= 64 else uuid.uuid4().hex
        request.request_id = request_id
        token = bind_request_id(request_id)
        try:
            response = self.get_response(request)
        finally:
            reset_request_id(token)
        response[self.HEADER] = request_id
        return response
