import logging

from django.db import DatabaseError, InterfaceError, OperationalError
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.response import Response
from rest_framework.views import APIView

from tokens.throttling import RateLimitedViewMixin

from .exceptions import SubmissionError
from .serializers import SubmitEntrySerializer, flatten_errors
from .services import submit_entry

logger = logging.getLogger(__name__)


def no_store(response):
    """答案相關的回應不允許任何快取"""
    response['Cache-Control'] = 'private, no-cache, no-store, must-revalidate'
    response['Pragma'] = 'no-cache'
    response['Expires'] = '0'
    return response


def submit_response(message, status_code=200, **extra):
    return no_store(Response({"message": message, **extra}, status=status_code))


class SubmitEntryView(RateLimitedViewMixin, APIView):
    """
    POST /api/submit

    驗證 Token、寫入答案、標記 Token 已使用，全部在同一個資料庫交易內完成。
    """

    throttle_scope = 'submit'

    def finalize_response(self, request, response, *args, **kwargs):
        # 429 等由 exception handler 產生的回應也要帶 no-store
        response = super().finalize_response(request, response, *args, **kwargs)
        return no_store(response)

    def post(self, request):
        try:
            data = request.data
        except (ParseError, UnsupportedMediaType) as e:
            logger.info(f"Malformed submit request: {e}")
            return submit_response("Invalid request format", status.HTTP_400_BAD_REQUEST)

        serializer = SubmitEntrySerializer(data=data)
        if not serializer.is_valid():
            logger.info(f"Submission validation errors: {serializer.errors}")
            return submit_response(
                "Invalid input",
                status.HTTP_400_BAD_REQUEST,
                errors=flatten_errors(serializer.errors),
            )

        validated = serializer.validated_data

        try:
            entry = submit_entry(
                token_code=validated['token_code'],
                contest_type=validated['contest_type'],
                full_name=validated['full_name'],
                contact_number=validated['contact_number'],
                guess=validated['guess_value'],
            )
        except SubmissionError as e:
            logger.info(f"Submission rejected ({e.code}) for token {validated['token_code']}")
            return submit_response(e.message, e.status_code)
        except (OperationalError, InterfaceError) as e:
            logger.error(f"Database unavailable during submission: {e}")
            return submit_response(
                "Database connection error. Please try again later.",
                status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        except DatabaseError:
            logger.exception("Transaction Error")
            return submit_response("An error occurred during submission.", status.HTTP_500_INTERNAL_SERVER_ERROR)
        except Exception:
            logger.exception("Submission Error")
            return submit_response("An error occurred during submission.", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return submit_response("Submission successful!", status.HTTP_200_OK, responseId=str(entry.id))
