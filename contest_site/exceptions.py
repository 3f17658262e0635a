from rest_framework.views import exception_handler

from tokens.throttling import RATE_LIMIT_MESSAGE, RateLimitExceeded


def contest_exception_handler(exc, context):
    """
    DRF 預設 handler 之外，把 429 改成 {error, message} 並補上 X-RateLimit-* 標頭
    """
    response = exception_handler(exc, context)

    if isinstance(exc, RateLimitExceeded) and response is not None:
        response.data = {
            'error': 'Too Many Requests',
            'message': RATE_LIMIT_MESSAGE,
        }
        for header, value in exc.rate_limit_headers().items():
            response[header] = value

    return response
