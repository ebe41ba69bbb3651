from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .serializers import DataCorrectionCreateSerializer, DataCorrectionRequestSerializer


class DataCorrectionRequestView(APIView):
    """수험표 정보 정정 요청 API."""

    @extend_schema(
        summary="정보 정정 요청",
        request=DataCorrectionCreateSerializer,
        responses={
            200: OpenApiExample("성공 예시", value={"detail": "정정 요청이 접수되었습니다."}),
            400: OpenApiResponse(description="잘못된 요청 데이터"),
            404: OpenApiResponse(description="학생을 찾을 수 없음"),
        },
        tags=["DataCorrection"],
    )
    def post(self, request):
        """학생의 정보 정정 요청을 접수.

        Args:
            request (Request): student_id, correction_details 를 담은 요청.

        Returns:
            Response: 접수 완료 메시지 또는 오류 메시지.
        """
        serializer = DataCorrectionCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "잘못된 요청 데이터입니다."}, status=status.HTTP_400_BAD_REQUEST)

        services.request_data_correction(
            serializer.validated_data["student_id"],
            serializer.validated_data["correction_details"],
        )
        return Response({"detail": "정정 요청이 접수되었습니다."}, status=status.HTTP_200_OK)


class DataCorrectionListView(APIView):
    @extend_schema(
        summary="정보 정정 요청 목록 조회",
        responses={200: DataCorrectionRequestSerializer(many=True)},
        tags=["DataCorrection"],
    )
    def get(self, request):
        """정정 요청 목록을 최신순으로 반환"""
        corrections = services.list_data_correction_requests()
        return Response(DataCorrectionRequestSerializer(corrections, many=True).data, status=status.HTTP_200_OK)


class DataCorrectionApproveView(APIView):
    @extend_schema(
        summary="정보 정정 요청 승인",
        request=None,
        responses={
            200: OpenApiExample("성공 예시", value={"detail": "정정 요청이 승인되었습니다."}),
            404: OpenApiResponse(description="정정 요청을 찾을 수 없음"),
            409: OpenApiResponse(description="이미 처리된 요청"),
        },
        tags=["DataCorrection"],
    )
    def post(self, request, request_id):
        """PENDING 상태의 정정 요청을 승인"""
        services.approve_data_correction(request_id)
        return Response({"detail": "정정 요청이 승인되었습니다."}, status=status.HTTP_200_OK)


class DataCorrectionRejectView(APIView):
    @extend_schema(
        summary="정보 정정 요청 반려",
        request=None,
        parameters=[OpenApiParameter("rejection_reason", str, required=True, description="반려 사유")],
        responses={
            200: OpenApiExample("성공 예시", value={"detail": "정정 요청이 반려되었습니다."}),
            400: OpenApiResponse(description="반려 사유 누락"),
            404: OpenApiResponse(description="정정 요청을 찾을 수 없음"),
            409: OpenApiResponse(description="이미 처리된 요청"),
        },
        tags=["DataCorrection"],
    )
    def post(self, request, request_id):
        """정정 요청을 반려.

        Args:
            request (Request): rejection_reason 쿼리 파라미터를 포함한 요청.
            request_id (int): 반려할 정정 요청의 식별자.

        Returns:
            Response: 반려 완료 메시지.
        """
        rejection_reason = request.query_params.get("rejection_reason")
        services.reject_data_correction(request_id, rejection_reason)
        return Response({"detail": "정정 요청이 반려되었습니다."}, status=status.HTTP_200_OK)
