import logging
import secrets
import string
from pathlib import Path
from typing import Iterable, List, NamedTuple

from django.conf import settings
from django.db import IntegrityError, transaction

from .cache import CacheKeys, get_token_cache, token_cache_stats
from .models import Token

logger = logging.getLogger(__name__)

MESSAGE_VALID = "Token is valid"
MESSAGE_NOT_FOUND = "Invalid token provided."
MESSAGE_NOT_VALID = "This token is not valid for the contest."
MESSAGE_ALREADY_USED = "This token has already been used."

REASON_VALID = 'valid'
REASON_NOT_FOUND = 'not_found'
REASON_NOT_VALID = 'not_valid'
REASON_USED = 'used'

# 驗證結果 → CACHE_TIMEOUTS 的鍵
_TIMEOUT_KEYS = {
    REASON_VALID: 'token_valid',
    REASON_NOT_FOUND: 'token_not_found',
    REASON_NOT_VALID: 'token_not_valid',
    REASON_USED: 'token_used',
}

_DEFAULT_TIMEOUTS = {
    'token_valid': 60,
    'token_not_found': 30,
    'token_not_valid': 300,
    'token_used': 300,
    'token_submitted': 600,
}

TOKEN_ALPHABET = string.ascii_uppercase + string.digits
TOKEN_LENGTH = 8


class TokenVerdict(NamedTuple):
    valid: bool
    message: str
    reason: str

    def as_payload(self):
        return {"message": self.message, "valid": self.valid}


VERDICT_VALID = TokenVerdict(True, MESSAGE_VALID, REASON_VALID)
VERDICT_NOT_FOUND = TokenVerdict(False, MESSAGE_NOT_FOUND, REASON_NOT_FOUND)
VERDICT_NOT_VALID = TokenVerdict(False, MESSAGE_NOT_VALID, REASON_NOT_VALID)
VERDICT_USED = TokenVerdict(False, MESSAGE_ALREADY_USED, REASON_USED)


def cache_timeout(name):
    timeouts = getattr(settings, 'CACHE_TIMEOUTS', {})
    return timeouts.get(name, _DEFAULT_TIMEOUTS[name])


def check_token(token_code: str) -> TokenVerdict:
    """
    直接查詢資料庫判斷 Token 狀態。

    判斷順序：不存在 → 已使用 → 無效 → 可用
    """
    token = (
        Token.objects
        .filter(token_code=token_code)
        .only('id', 'is_valid', 'is_used')
        .first()
    )
    if token is None:
        return VERDICT_NOT_FOUND
    if token.is_used:
        return VERDICT_USED
    if not token.is_valid:
        return VERDICT_NOT_VALID
    return VERDICT_VALID


def validate_token(token_code: str) -> TokenVerdict:
    """
    先查快取，miss 時查資料庫並回填快取。
    資料庫錯誤會直接往上拋，由呼叫端決定回應。

    回填用 add：查詢期間若已有送出寫入「已使用」，不覆蓋它。
    """
    cache = get_token_cache()
    cache_key = CacheKeys.token(token_code)

    cached = cache.get_safe(cache_key)
    if cached is not None:
        token_cache_stats.record(True, cached.reason)
        logger.debug(f"Token validation cache hit: {token_code}")
        return cached

    verdict = check_token(token_code)
    token_cache_stats.record(False, verdict.reason)
    logger.debug(f"Token validation cache miss: {token_code}")

    cache.add_safe(cache_key, verdict, cache_timeout(_TIMEOUT_KEYS[verdict.reason]))
    return verdict


def mark_token_submitted(token_code: str):
    """送出成功後，以「已使用」取代快取中的驗證結果"""
    get_token_cache().set_safe(CacheKeys.token(token_code), VERDICT_USED, cache_timeout('token_submitted'))


# ---------------------------------------------------------------------------
# Seeding


def read_token_codes(path) -> List[str]:
    """
    讀取 Token 檔案，每行一個代碼，忽略空行與前後空白。

    Raises:
        OSError: 檔案無法讀取
    """
    content = Path(path).read_text(encoding='utf-8')
    return [line.strip() for line in content.splitlines() if line.strip()]


def generate_token_codes(count: int, length: int = TOKEN_LENGTH) -> List[str]:
    """產生 count 個不重複的隨機代碼（大寫字母與數字）"""
    codes = set()
    while len(codes) < count:
        codes.add(''.join(secrets.choice(TOKEN_ALPHABET) for _ in range(length)))
    return sorted(codes)


class SeedResult(NamedTuple):
    created: int
    skipped: int
    failed: int


def seed_tokens(token_codes: Iterable[str]) -> SeedResult:
    """
    建立尚不存在的 Token，已存在的略過；單筆失敗記錄後繼續。
    """
    codes = list(dict.fromkeys(token_codes))
    existing = set(
        Token.objects.filter(token_code__in=codes).values_list('token_code', flat=True)
    )
    logger.info(f"Found {len(existing)} tokens already in the database")

    created = failed = 0
    for code in codes:
        if code in existing:
            continue
        try:
            with transaction.atomic():
                Token.objects.create(token_code=code, is_valid=True)
            created += 1
        except IntegrityError as e:
            logger.error(f"Failed to create token {code}: {e}")
            failed += 1

    return SeedResult(created=created, skipped=len(existing), failed=failed)
