from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone
import uuid

from tokens.models import Token

# PositiveIntegerField 在 PostgreSQL 是 32 位元整數
MAX_SEED_GUESS = 2147483647


class Response(models.Model):
    """種子數量競賽（papaya）的答案，每個 Token 最多一筆"""

    CONTEST_TYPE = 'papaya'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    contest_type = models.CharField(max_length=20, default=CONTEST_TYPE)
    full_name = models.CharField(max_length=200)
    contact_number = models.CharField(max_length=50)
    papaya_seed_guess = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(MAX_SEED_GUESS)],
    )
    submitted_at = models.DateTimeField(default=timezone.now)

    token = models.OneToOneField(
        Token,
        on_delete=models.PROTECT,
        related_name='response',
    )

    class Meta:
        db_table = 'Response'
        ordering = ['-submitted_at']
        indexes = [
            models.Index(fields=['contest_type'], name='Response_contest_type_idx'),
            models.Index(fields=['-submitted_at'], name='Response_submitted_at_idx'),
            models.Index(fields=['contest_type', '-submitted_at'], name='Response_type_submitted_idx'),
        ]

    def __str__(self):
        return f"Response {self.id} - {self.full_name} - {self.papaya_seed_guess}"


class FlowerResponse(models.Model):
    """花名競賽（flower）的答案，每個 Token 最多一筆"""

    CONTEST_TYPE = 'flower'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    contest_type = models.CharField(max_length=20, default=CONTEST_TYPE)
    full_name = models.CharField(max_length=200)
    contact_number = models.CharField(max_length=50)
    secret_flower_name = models.CharField(max_length=200)
    submitted_at = models.DateTimeField(default=timezone.now)

    token = models.OneToOneField(
        Token,
        on_delete=models.PROTECT,
        related_name='flower_response',
    )

    class Meta:
        db_table = 'FlowerResponse'
        ordering = ['-submitted_at']
        indexes = [
            models.Index(fields=['contest_type'], name='FlowerResp_contest_type_idx'),
        ]

    def __str__(self):
        return f"FlowerResponse {self.id} - {self.full_name} - {self.secret_flower_name}"


# contest_type -> (model, 答案欄位)
CONTEST_MODELS = {
    Response.CONTEST_TYPE: (Response, 'papaya_seed_guess'),
    FlowerResponse.CONTEST_TYPE: (FlowerResponse, 'secret_flower_name'),
}
