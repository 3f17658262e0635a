from rest_framework import serializers


class ValidateTokenSerializer(serializers.Serializer):
    tokenCode = serializers.CharField(
        source='token_code',
        max_length=64,
        # 代碼逐字比對，不去除前後空白
        trim_whitespace=False,
        error_messages={
            'required': 'Token is required',
            'blank': 'Token is required',
        },
    )
