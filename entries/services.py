import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from tokens.models import Token
from tokens.services import mark_token_submitted

from .exceptions import (
    ContestClosed,
    DuplicateSubmission,
    InvalidToken,
    TokenAlreadyUsed,
    TokenNotValid,
)
from .models import CONTEST_MODELS

logger = logging.getLogger(__name__)


def enabled_contest_types():
    return [t for t in getattr(settings, 'CONTEST_TYPES', list(CONTEST_MODELS)) if t in CONTEST_MODELS]


def submit_entry(token_code, contest_type, full_name, contact_number, guess):
    """
    在單一交易內驗證 Token、寫入答案並把 Token 標記為已使用。

    Args:
        token_code: Token 代碼
        contest_type: 'papaya' 或 'flower'
        full_name: 姓名
        contact_number: 聯絡電話
        guess: papaya 為正整數，flower 為花名字串

    Returns:
        新建立的 Response / FlowerResponse

    Raises:
        ContestClosed: 競賽類型未啟用
        InvalidToken / TokenNotValid / TokenAlreadyUsed: Token 狀態不符
        DuplicateSubmission: 唯一約束衝突（併發送出）
    """
    if contest_type not in enabled_contest_types():
        raise ContestClosed()

    model, guess_field = CONTEST_MODELS[contest_type]
    submitted_at = timezone.now()

    try:
        with transaction.atomic():
            token = (
                Token.objects
                .select_for_update()
                .filter(token_code=token_code)
                .only('id', 'is_valid', 'is_used')
                .first()
            )

            if token is None:
                raise InvalidToken()
            if not token.is_valid:
                raise TokenNotValid()
            if token.is_used:
                raise TokenAlreadyUsed()

            response = model.objects.create(
                contest_type=contest_type,
                full_name=full_name,
                contact_number=contact_number,
                submitted_at=submitted_at,
                token_id=token.id,
                **{guess_field: guess},
            )

            # 條件更新：另一個交易已先標記時 updated == 0
            updated = (
                Token.objects
                .filter(id=token.id, is_used=False)
                .update(is_used=True, used_at=submitted_at, updated_at=submitted_at)
            )
            if updated != 1:
                raise TokenAlreadyUsed()
    except IntegrityError as e:
        logger.warning(f"Duplicate submission for token {token_code}: {e}")
        raise DuplicateSubmission()

    logger.info(f"Submission {response.id} stored for token {token_code} ({contest_type})")
    mark_token_submitted(token_code)
    return response
