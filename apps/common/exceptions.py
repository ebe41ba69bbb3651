import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class DomainError(APIException):
    """서비스 계층에서 발생시키는 예외의 공통 부모.

    detail 은 {"error": ...} 형태로 감싸서 응답.
    """

    status_code = 400
    default_detail = "잘못된 요청입니다."
    default_code = "invalid"

    def __init__(self, detail=None):
        if detail is None:
            detail = self.default_detail
        self.message = detail
        super().__init__({"error": detail})


class DomainValidationError(DomainError):
    status_code = 400
    default_detail = "입력값이 올바르지 않습니다."
    default_code = "invalid"


class NotFoundError(DomainError):
    status_code = 404
    default_detail = "요청한 데이터를 찾을 수 없습니다."
    default_code = "not_found"


class InvalidStatusTransition(DomainError):
    status_code = 409
    default_detail = "현재 상태에서는 처리할 수 없는 요청입니다."
    default_code = "invalid_status"


class DocumentValidationError(DomainError):
    status_code = 400
    default_detail = "지원되지 않는 파일 형식입니다. PDF 또는 이미지 파일만 업로드할 수 있습니다."
    default_code = "invalid_document"


class DocumentStoreError(DomainError):
    status_code = 502
    default_detail = "파일 저장소 처리 중 오류가 발생했습니다."
    default_code = "storage_error"


def exception_handler(exc, context):
    """DRF 기본 핸들러로 처리되지 않는 예외는 로그를 남기고 500 으로 응답"""
    response = drf_exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception("Unhandled exception in %s", view.__class__.__name__ if view else "unknown view")
    return Response({"error": "서버 내부 오류가 발생했습니다."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
