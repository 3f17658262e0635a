import logging

from django.db import DatabaseError, InterfaceError, OperationalError
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import ValidateTokenSerializer
from .services import validate_token
from .throttling import RateLimitedViewMixin

logger = logging.getLogger(__name__)


def token_response(message, valid=False, status_code=200):
    return Response({"message": message, "valid": valid}, status=status_code)


class ValidateTokenView(RateLimitedViewMixin, APIView):
    """
    POST /api/validate-token

    檢查 Token 是否可以用來送出答案。無論 Token 是否可用都回 200，
    由 body 的 valid 欄位判斷。
    """

    throttle_scope = 'validate_token'

    def post(self, request):
        try:
            data = request.data
        except (ParseError, UnsupportedMediaType) as e:
            logger.info(f"Malformed validate-token request: {e}")
            return token_response("Invalid request format", status_code=status.HTTP_400_BAD_REQUEST)

        serializer = ValidateTokenSerializer(data=data)
        if not serializer.is_valid():
            return token_response("Invalid input", status_code=status.HTTP_400_BAD_REQUEST)

        token_code = serializer.validated_data['token_code']

        try:
            verdict = validate_token(token_code)
        except (OperationalError, InterfaceError) as e:
            logger.error(f"Database unavailable during token validation: {e}")
            return token_response(
                "Database connection error. Please try again later.",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        except DatabaseError as e:
            logger.error(f"Database error during token validation: {e}")
            return token_response("Database error occurred", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        except Exception:
            logger.exception("Token validation error")
            return token_response("Error validating token", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(verdict.as_payload(), status=status.HTTP_200_OK)
