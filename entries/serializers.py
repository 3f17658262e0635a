from rest_framework import serializers

from .models import CONTEST_MODELS, MAX_SEED_GUESS
from .services import enabled_contest_types


class SubmitEntrySerializer(serializers.Serializer):
    tokenCode = serializers.CharField(
        source='token_code',
        max_length=64,
        # 代碼逐字比對，不去除前後空白
        trim_whitespace=False,
        error_messages={'required': 'Token is required', 'blank': 'Token is required'},
    )
    contestType = serializers.ChoiceField(
        source='contest_type',
        choices=list(CONTEST_MODELS),
    )
    fullName = serializers.CharField(
        source='full_name',
        max_length=200,
        error_messages={'required': 'Full Name is required', 'blank': 'Full Name is required'},
    )
    contactNumber = serializers.CharField(
        source='contact_number',
        max_length=50,
        error_messages={'required': 'Contact Number is required', 'blank': 'Contact Number is required'},
    )
    guess = serializers.IntegerField(
        required=False,
        min_value=1,
        max_value=MAX_SEED_GUESS,
        error_messages={
            'min_value': 'Guess must be a positive number',
            'max_value': 'Guess is too large',
        },
    )
    secretFlowerName = serializers.CharField(
        source='secret_flower_name',
        required=False,
        max_length=200,
        error_messages={'blank': 'Secret flower name guess is required'},
    )

    def validate_contestType(self, value):
        if value not in enabled_contest_types():
            raise serializers.ValidationError(f"Contest type '{value}' is not open")
        return value

    def validate(self, attrs):
        """依競賽類型檢查對應的答案欄位，並統一放到 guess_value"""
        contest_type = attrs['contest_type']
        if contest_type == 'papaya':
            if attrs.get('guess') is None:
                raise serializers.ValidationError({'guess': 'Seed count guess is required'})
            attrs['guess_value'] = attrs['guess']
        else:
            if not attrs.get('secret_flower_name'):
                raise serializers.ValidationError({'secretFlowerName': 'Secret flower name guess is required'})
            attrs['guess_value'] = attrs['secret_flower_name']
        return attrs


def flatten_errors(errors, prefix=''):
    """把 serializer.errors 攤平成 [{path, message}]"""
    flat = []
    for field, messages in errors.items():
        path = f"{prefix}.{field}" if prefix else field
        if isinstance(messages, dict):
            flat.extend(flatten_errors(messages, path))
            continue
        if not isinstance(messages, (list, tuple)):
            messages = [messages]
        for message in messages:
            flat.append({'path': path, 'message': str(message)})
    return flat
