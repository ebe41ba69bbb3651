from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .serializers import AdminSerializer, AdminTokenObtainPairSerializer


class LoginView(TokenObtainPairView):
    """관리자 로그인 API.

    username / password 로 access, refresh 토큰을 발급.
    """

    serializer_class = AdminTokenObtainPairSerializer

    @extend_schema(
        summary="관리자 로그인",
        description="아이디와 비밀번호로 JWT 토큰을 발급합니다.",
        examples=[OpenApiExample("요청 예시", value={"username": "admin", "password": "password"}, request_only=True)],
        tags=["Admin"],
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class AdminTokenRefreshView(TokenRefreshView):
    @extend_schema(summary="access 토큰 재발급", tags=["Admin"])
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class MyinfoView(APIView):
    """로그인한 관리자 정보 조회 API."""

    @extend_schema(summary="내 정보 조회", responses={200: AdminSerializer}, tags=["Admin"])
    def get(self, request):
        serializer = AdminSerializer(request.user)
        return Response(serializer.data, status=status.HTTP_200_OK)
