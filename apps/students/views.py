from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.exceptions import DomainValidationError
from apps.common.storage import get_document_store
from apps.common.utils import parse_optional_int

from . import services
from .models import VerificationStatus
from .serializers import StudentSerializer, StudentVerificationSerializer, StudentWriteSerializer


class StudentListCreateView(APIView):
    """학생 등록 신청 / 조건별 학생 목록 조회 API."""

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(
        summary="학생 목록 조회",
        description="기관, 과정, 학년도, 검증 상태 조건으로 학생 목록을 조회합니다. 전달된 조건만 적용됩니다.",
        parameters=[
            OpenApiParameter("institute_id", int, description="기관 ID"),
            OpenApiParameter("course_id", int, description="과정 ID"),
            OpenApiParameter("academic_year", str, description="학년도 (빈 값이면 학년도 미지정 학생)"),
            OpenApiParameter("verification_status", str, enum=VerificationStatus.values),
        ],
        responses={200: StudentSerializer(many=True)},
        tags=["Student"],
    )
    def get(self, request):
        """조건에 맞는 학생 목록을 반환.

        Args:
            request (Request): institute_id, course_id, academic_year, verification_status 쿼리 파라미터를 포함한 요청.

        Returns:
            Response: 학생 목록.
        """
        params = request.query_params
        verification_status = params.get("verification_status") or None
        if verification_status is not None and verification_status not in VerificationStatus.values:
            raise DomainValidationError(f"지원하지 않는 검증 상태입니다: {verification_status}")

        students = services.get_filtered_students(
            institute_id=parse_optional_int(params.get("institute_id"), "institute_id"),
            course_id=parse_optional_int(params.get("course_id"), "course_id"),
            academic_year=params.get("academic_year"),
            verification_status=verification_status,
        )
        return Response(StudentSerializer(students, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="학생 등록 신청",
        description="학생 정보와 필수 서류 4종(PDF 또는 이미지)을 업로드하여 등록 신청합니다. 가등록 번호가 부여되고 PENDING 상태가 됩니다.",
        request={"multipart/form-data": StudentWriteSerializer},
        responses={
            201: StudentSerializer,
            400: OpenApiResponse(description="잘못된 입력값 또는 서류 형식"),
            404: OpenApiResponse(description="기관 또는 과정 코드를 찾을 수 없음"),
            502: OpenApiResponse(description="파일 저장소 오류"),
        },
        tags=["Student"],
    )
    def post(self, request):
        """학생 정보와 서류를 받아 등록 신청을 처리.

        Args:
            request (Request): 학생 정보와 서류 4종이 담긴 multipart 요청.

        Returns:
            Response: 등록된 학생 정보 또는 입력값 오류.
        """
        serializer = StudentWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data, documents = serializer.split_documents()
        student = services.enroll_student(data, documents, store=get_document_store())
        return Response(StudentSerializer(student).data, status=status.HTTP_201_CREATED)


class StudentDetailView(APIView):
    """학생 단건 조회 / 수정 / 삭제 API."""

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(
        summary="학생 상세 조회",
        responses={200: StudentSerializer, 404: OpenApiResponse(description="학생을 찾을 수 없음")},
        tags=["Student"],
    )
    def get(self, request, student_id):
        """학생 한 명의 정보를 반환"""
        student = services.get_student(student_id)
        return Response(StudentSerializer(student).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="학생 정보 수정",
        description="전달된 항목만 수정합니다. 서류가 포함되면 기존 파일을 삭제하고 새 파일로 교체하며, 상태는 PENDING 으로 돌아갑니다.",
        request={"multipart/form-data": StudentWriteSerializer},
        responses={
            200: StudentSerializer,
            400: OpenApiResponse(description="잘못된 입력값"),
            404: OpenApiResponse(description="학생 / 기관 / 과정을 찾을 수 없음"),
        },
        tags=["Student"],
    )
    def put(self, request, student_id):
        """전달된 항목만 반영하여 학생 정보를 수정.

        Args:
            request (Request): 수정할 항목과 교체할 서류가 담긴 요청.
            student_id (int): 수정할 학생의 식별자.

        Returns:
            Response: 수정된 학생 정보 또는 입력값 오류.
        """
        serializer = StudentWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data, documents = serializer.split_documents()
        student = services.update_student(student_id, data, documents, store=get_document_store())
        return Response(StudentSerializer(student).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="학생 삭제",
        description="학생과 저장된 서류를 함께 삭제합니다.",
        responses={
            200: OpenApiResponse(description="삭제 완료"),
            404: OpenApiResponse(description="학생을 찾을 수 없음"),
            502: OpenApiResponse(description="파일 저장소 오류"),
        },
        tags=["Student"],
    )
    def delete(self, request, student_id):
        """학생과 제출 서류를 삭제"""
        services.delete_student(student_id, store=get_document_store())
        return Response({"detail": "학생과 제출 서류가 삭제되었습니다."}, status=status.HTTP_200_OK)


class StudentVerifyView(APIView):
    """학생 검증(승인 / 반려) API."""

    @extend_schema(
        summary="학생 검증",
        description="PENDING 상태의 학생을 VERIFIED 또는 REJECTED 로 처리합니다. VERIFIED 이면 최종 등록 번호가 부여됩니다.",
        request=StudentVerificationSerializer,
        responses={
            200: StudentSerializer,
            400: OpenApiResponse(description="잘못된 검증 결과"),
            404: OpenApiResponse(description="학생을 찾을 수 없음"),
            409: OpenApiResponse(description="PENDING 상태가 아님"),
        },
        tags=["Student"],
    )
    def put(self, request, student_id):
        """검증 결과(VERIFIED / REJECTED)와 관리자 의견을 반영.

        Args:
            request (Request): status, remarks 를 담은 요청.
            student_id (int): 검증할 학생의 식별자.

        Returns:
            Response: 검증이 반영된 학생 정보.
        """
        serializer = StudentVerificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        student = services.verify_student(
            student_id,
            serializer.validated_data["status"],
            serializer.validated_data["remarks"],
        )
        return Response(StudentSerializer(student).data, status=status.HTTP_200_OK)


class StudentPendingView(APIView):
    """21일 이상 검증 대기 중인 학생 조회 API."""

    @extend_schema(
        summary="장기 검증 대기 학생 조회",
        description="등록일로부터 21일 이상 PENDING 상태인 학생을 조회합니다.",
        parameters=[
            OpenApiParameter("course_id", int, description="과정 ID"),
            OpenApiParameter("academic_year", str, description="학년도 (빈 값이면 학년도 미지정 학생)"),
        ],
        responses={200: StudentSerializer(many=True)},
        tags=["Student"],
    )
    def get(self, request):
        """등록일로부터 21일 이상 PENDING 상태인 학생 목록을 반환"""
        params = request.query_params
        students = services.get_students_pending_over_21_days(
            course_id=parse_optional_int(params.get("course_id"), "course_id"),
            academic_year=params.get("academic_year"),
        )
        return Response(StudentSerializer(students, many=True).data, status=status.HTTP_200_OK)
