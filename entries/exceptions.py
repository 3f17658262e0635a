"""
送出答案時的業務錯誤，每個錯誤帶著對使用者顯示的訊息與 HTTP 狀態碼
"""

from rest_framework import status

from tokens.services import MESSAGE_ALREADY_USED, MESSAGE_NOT_FOUND, MESSAGE_NOT_VALID


class SubmissionError(Exception):
    message = "An error occurred during submission."
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = 'submission_error'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidToken(SubmissionError):
    message = MESSAGE_NOT_FOUND
    status_code = status.HTTP_400_BAD_REQUEST
    code = 'invalid_token'


class TokenNotValid(SubmissionError):
    message = MESSAGE_NOT_VALID
    status_code = status.HTTP_400_BAD_REQUEST
    code = 'token_not_valid'


class TokenAlreadyUsed(SubmissionError):
    message = MESSAGE_ALREADY_USED
    status_code = status.HTTP_409_CONFLICT
    code = 'token_already_used'


class DuplicateSubmission(SubmissionError):
    message = "Error processing submission (duplicate)."
    status_code = status.HTTP_409_CONFLICT
    code = 'duplicate'


class ContestClosed(SubmissionError):
    message = "This contest is not accepting submissions."
    status_code = status.HTTP_400_BAD_REQUEST
    code = 'contest_closed'
