from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import Admin


class AdminSerializer(serializers.ModelSerializer):
    class Meta:
        model = Admin
        fields = ("id", "username", "name", "email", "is_active", "is_staff", "is_superuser")


class AdminTokenObtainPairSerializer(TokenObtainPairSerializer):
    """토큰 발급 응답에 관리자 정보를 함께 담는 Serializer"""

    default_error_messages = {"no_active_account": "아이디 또는 비밀번호가 올바르지 않습니다."}

    def validate(self, attrs):
        data = super().validate(attrs)
        if not self.user.is_staff:
            raise serializers.ValidationError({"error": "관리자 계정만 로그인할 수 있습니다."})
        data["admin"] = AdminSerializer(self.user).data
        return data
