import logging

from django.db import transaction

from apps.common.exceptions import DomainValidationError, InvalidStatusTransition, NotFoundError
from apps.students.models import Student

from .models import CorrectionStatus, DataCorrectionRequest

logger = logging.getLogger(__name__)


def request_data_correction(student_id, correction_details):
    if not correction_details or not correction_details.strip():
        raise DomainValidationError("정정 요청 내용을 입력하세요.")

    student = Student.objects.filter(pk=student_id).first()
    if student is None:
        raise NotFoundError(f"ID {student_id} 에 해당하는 학생이 없습니다.")

    correction = DataCorrectionRequest.objects.create(student=student, correction_details=correction_details)
    logger.info("Data correction requested: id=%s student=%s", correction.pk, student_id)
    return correction


def list_data_correction_requests():
    return DataCorrectionRequest.objects.select_related("student").all()


def _get_pending_request(request_id):
    correction = DataCorrectionRequest.objects.select_for_update().filter(pk=request_id).first()
    if correction is None:
        raise NotFoundError(f"ID {request_id} 에 해당하는 정정 요청이 없습니다.")
    if correction.status != CorrectionStatus.PENDING:
        raise InvalidStatusTransition("이미 처리된 정정 요청입니다.")
    return correction


def approve_data_correction(request_id):
    with transaction.atomic():
        correction = _get_pending_request(request_id)
        correction.status = CorrectionStatus.APPROVED
        correction.save(update_fields=["status", "updated_at"])

    logger.info("Data correction approved: id=%s", request_id)
    return correction


def reject_data_correction(request_id, rejection_reason):
    if not rejection_reason or not rejection_reason.strip():
        raise DomainValidationError("반려 사유를 입력하세요.")

    with transaction.atomic():
        correction = _get_pending_request(request_id)
        correction.status = CorrectionStatus.REJECTED
        correction.rejection_reason = rejection_reason
        correction.save(update_fields=["status", "rejection_reason", "updated_at"])

    logger.info("Data correction rejected: id=%s", request_id)
    return correction
