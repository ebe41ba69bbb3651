"""학생 등록 / 검증 워크플로우.

등록 신청 → 서류 업로드 → 가등록 번호 부여(PENDING) → 관리자 검증(VERIFIED / REJECTED)
→ 반려 후 일정 기간 경과 시 CLOSED 로 이어지는 흐름을 담당.

서류 저장소는 get_document_store() 로 프로세스당 하나만 만들어 인자로 넘겨받음.
"""

import logging
import uuid
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.common.exceptions import (
    DocumentStoreError,
    DomainValidationError,
    InvalidStatusTransition,
    NotFoundError,
)
from apps.common.storage import get_document_store
from apps.courses.services import get_course_by_code, get_institute_by_code

from .models import DOCUMENT_FIELDS, Student, VerificationStatus, document_path_field

logger = logging.getLogger(__name__)

# 등록 / 수정 시 입력값에서 그대로 옮겨 담는 필드
STUDENT_FIELDS = (
    "first_name",
    "surname",
    "father_name",
    "mother_name",
    "date_of_birth",
    "gender",
    "email",
    "mobile_no",
    "address",
    "center_code",
    "center_name",
    "academic_year",
    "enrollment_date",
)


def generate_provisional_number(course):
    return f"{course.course_code}-{uuid.uuid4()}"


def generate_enrollment_number(student, year):
    return f"EN{year}{student.center_code}{student.id}"


def _student_fields(data):
    fields = {field: data[field] for field in STUDENT_FIELDS if field in data}
    # 빈 학년도는 NULL 로 저장 (학년도 미지정 조회와 맞추기 위함)
    if "academic_year" in fields and not (fields["academic_year"] or "").strip():
        fields["academic_year"] = None
    return fields


def _resolve_institute(institute_code):
    institute = get_institute_by_code(institute_code)
    if institute is None:
        raise NotFoundError(f"기관 코드 {institute_code} 에 해당하는 기관이 없습니다.")
    return institute


def _resolve_course(course_code):
    course = get_course_by_code(course_code)
    if course is None:
        raise NotFoundError(f"과정 코드 {course_code} 에 해당하는 과정이 없습니다.")
    return course


def _store_document(store, document_name, upload):
    filename = getattr(upload, "name", None) or document_name
    return store.store(upload, filename)


def _discard_documents(store, locations):
    """실패한 요청에서 이미 업로드된 서류를 정리 (best-effort)"""
    for location in locations:
        try:
            store.delete(location)
        except DocumentStoreError:
            logger.warning("Orphan document left in storage: %s", location)


def _clear_document_paths(student, path_fields):
    """이미 저장소에서 삭제된 서류의 경로를 비워서 없는 파일을 가리키지 않도록 함"""
    if not path_fields:
        return
    Student.objects.filter(pk=student.pk).update(
        updated_at=timezone.now(), **{path_field: "" for path_field in path_fields}
    )
    logger.warning("Document paths cleared after failed update: id=%s fields=%s", student.pk, path_fields)


def _academic_year_predicates(academic_year):
    # 빈 문자열은 학년도가 지정되지 않은(NULL) 학생 조회로 처리
    if academic_year is None:
        return []
    if not academic_year.strip():
        return [Q(academic_year__isnull=True)]
    return [Q(academic_year=academic_year)]


def enroll_student(data, documents, store=None):
    """학생 등록 신청을 처리.

    기관 / 과정을 코드로 조회하고 필수 서류 4종을 업로드한 뒤
    가등록 번호를 부여하여 PENDING 상태로 저장.

    Args:
        data (dict): 학생 정보 (institute_code, course_code 포함).
        documents (dict): 서류명 → 업로드 파일.
        store (DocumentStore, optional): 서류 저장소.

    Returns:
        Student: 저장된 학생.

    Raises:
        DomainValidationError: 필수 서류가 누락된 경우.
        NotFoundError: 기관 또는 과정 코드가 존재하지 않는 경우.
        DocumentValidationError: 서류 형식이 올바르지 않은 경우.
        DocumentStoreError: 서류 업로드에 실패한 경우.
    """
    if store is None:
        store = get_document_store()

    missing = [name for name in DOCUMENT_FIELDS if not documents.get(name)]
    if missing:
        raise DomainValidationError(f"필수 서류가 누락되었습니다: {', '.join(missing)}")

    institute = _resolve_institute(data.get("institute_code"))
    course = _resolve_course(data.get("course_code"))

    student = Student(institute=institute, course=course, **_student_fields(data))
    student.provisional_enrollment_number = generate_provisional_number(course)

    stored = []
    try:
        for name in DOCUMENT_FIELDS:
            location = _store_document(store, name, documents[name])
            stored.append(location)
            setattr(student, document_path_field(name), location)

        student.verification_status = VerificationStatus.PENDING
        student.verification_date = timezone.localdate()
        with transaction.atomic():
            student.save()
    except Exception:
        _discard_documents(store, stored)
        raise

    logger.info("Student enrolled: id=%s provisional=%s", student.pk, student.provisional_enrollment_number)
    return student


def update_student(student_id, data, documents, store=None):
    """학생 정보를 수정하고 검증 대기(PENDING) 상태로 되돌림.

    새 서류가 들어온 항목은 기존 파일을 삭제한 뒤 새 파일을 업로드.
    도중에 실패하면 이번 요청에서 올린 파일은 지우고, 이미 삭제된 기존 파일의
    경로는 비워둠 (학생은 해당 서류를 다시 제출해야 함).

    Raises:
        NotFoundError: 학생 / 기관 / 과정이 존재하지 않는 경우.
        InvalidStatusTransition: CLOSED 상태의 학생인 경우.
    """
    if store is None:
        store = get_document_store()
    student = get_student(student_id)

    if student.verification_status == VerificationStatus.CLOSED:
        raise InvalidStatusTransition("CLOSED 상태의 학생 정보는 수정할 수 없습니다.")

    if data.get("institute_code"):
        student.institute = _resolve_institute(data["institute_code"])
    if data.get("course_code"):
        student.course = _resolve_course(data["course_code"])

    stored = []
    deleted_paths = []
    try:
        for name in DOCUMENT_FIELDS:
            upload = documents.get(name)
            if not upload:
                continue
            path_field = document_path_field(name)
            store.delete(getattr(student, path_field))
            deleted_paths.append(path_field)
            location = _store_document(store, name, upload)
            stored.append(location)
            setattr(student, path_field, location)

        for field, value in _student_fields(data).items():
            setattr(student, field, value)

        student.verification_date = timezone.localdate()
        student.verification_status = VerificationStatus.PENDING
        with transaction.atomic():
            student.save()
    except Exception:
        _discard_documents(store, stored)
        _clear_document_paths(student, deleted_paths)
        raise

    logger.info("Student updated and reset to PENDING: id=%s", student.pk)
    return student


def delete_student(student_id, store=None):
    """학생과 저장된 서류를 함께 삭제"""
    if store is None:
        store = get_document_store()
    student = get_student(student_id)

    for location in student.document_locations:
        store.delete(location)

    student.delete()
    logger.info("Student and associated documents deleted: id=%s", student_id)


def get_student(student_id):
    student = Student.objects.select_related("institute", "course").filter(pk=student_id).first()
    if student is None:
        raise NotFoundError(f"ID {student_id} 에 해당하는 학생이 없습니다.")
    return student


def get_filtered_students(institute_id=None, course_id=None, academic_year=None, verification_status=None):
    """전달된 조건만 AND 로 묶어서 학생 목록 조회"""
    predicates = []
    if institute_id is not None:
        predicates.append(Q(institute_id=institute_id))
    if course_id is not None:
        predicates.append(Q(course_id=course_id))
    predicates.extend(_academic_year_predicates(academic_year))
    if verification_status is not None:
        predicates.append(Q(verification_status=verification_status))

    return Student.objects.select_related("institute", "course").filter(*predicates).order_by("id")


def find_by_verification_status(verification_status):
    return Student.objects.filter(verification_status=verification_status).order_by("id")


def verify_student(student_id, decision, remarks=""):
    """관리자 검증 결과를 반영.

    VERIFIED 이면 최종 등록 번호(EN{연도}{센터코드}{id})를 부여하고,
    REJECTED 이면 수정 요청(requires_revision) 플래그를 설정.
    PENDING 상태의 학생만 처리할 수 있음.

    Raises:
        DomainValidationError: decision 이 VERIFIED / REJECTED 가 아닌 경우.
        NotFoundError: 학생이 존재하지 않는 경우.
        InvalidStatusTransition: 학생이 PENDING 상태가 아닌 경우.
    """
    if decision not in (VerificationStatus.VERIFIED, VerificationStatus.REJECTED):
        raise DomainValidationError("검증 결과는 VERIFIED 또는 REJECTED 만 가능합니다.")

    with transaction.atomic():
        student = Student.objects.select_for_update().filter(pk=student_id).first()
        if student is None:
            raise NotFoundError(f"ID {student_id} 에 해당하는 학생이 없습니다.")
        if student.verification_status != VerificationStatus.PENDING:
            raise InvalidStatusTransition(
                f"{student.verification_status} 상태의 학생은 검증할 수 없습니다. (PENDING 상태만 가능)"
            )

        today = timezone.localdate()
        student.verification_status = decision
        student.admin_remarks = remarks or ""
        student.verification_date = today

        if decision == VerificationStatus.VERIFIED:
            student.enrollment_number = generate_enrollment_number(student, today.year)
            student.requires_revision = False
        else:
            student.requires_revision = True

        student.save()

    logger.info("Student %s verification: %s", student.pk, decision)
    return student


def close_stale_rejections(queryset=None):
    """반려 후 STALE_REJECTION_DAYS 일이 지난 학생을 일괄 CLOSED 처리.

    Args:
        queryset (QuerySet, optional): 대상 학생 범위. 없으면 전체 학생.

    Returns:
        int: CLOSED 로 바뀐 학생 수.
    """
    if queryset is None:
        queryset = Student.objects.all()

    cutoff_date = timezone.localdate() - timedelta(days=settings.STALE_REJECTION_DAYS)
    closed = queryset.filter(
        verification_status=VerificationStatus.REJECTED,
        verification_date__lt=cutoff_date,
    ).update(verification_status=VerificationStatus.CLOSED, updated_at=timezone.now())

    logger.info("Rejected students closed: %s (cutoff=%s)", closed, cutoff_date)
    return closed


def get_students_pending_over_21_days(course_id=None, academic_year=None):
    """등록일로부터 PENDING_ALERT_DAYS 일 이상 검증 대기 중인 학생 조회"""
    threshold_date = timezone.localdate() - timedelta(days=settings.PENDING_ALERT_DAYS)

    predicates = [
        Q(enrollment_date__lte=threshold_date),
        Q(verification_status=VerificationStatus.PENDING),
    ]
    if course_id is not None:
        predicates.append(Q(course_id=course_id))
    predicates.extend(_academic_year_predicates(academic_year))

    return Student.objects.select_related("institute", "course").filter(*predicates).order_by("enrollment_date")
