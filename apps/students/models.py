from django.db import models
from django.utils import timezone

from apps.common.models import BaseModel
from apps.courses.models import Course, Institute

# 학생이 제출하는 필수 서류 (필드명: <서류명>_path 에 저장 위치 URL 보관)
DOCUMENT_FIELDS = (
    "high_school_marksheet",
    "high_school_certificate",
    "intermediate_marksheet",
    "intermediate_certificate",
)


def document_path_field(document_name):
    return f"{document_name}_path"


class VerificationStatus(models.TextChoices):
    PENDING = "PENDING", "검증 대기"
    VERIFIED = "VERIFIED", "검증 완료"
    REJECTED = "REJECTED", "반려"
    CLOSED = "CLOSED", "종료"


class Student(BaseModel):
    """등록 신청 학생 모델.

    등록 신청 시 PENDING 으로 생성되고 관리자 검증에 따라
    VERIFIED / REJECTED 로 바뀌며, 반려 후 일정 기간이 지나면 CLOSED 처리.
    """

    institute = models.ForeignKey(Institute, on_delete=models.PROTECT)
    course = models.ForeignKey(Course, on_delete=models.PROTECT)

    first_name = models.CharField(max_length=100)
    surname = models.CharField(max_length=100, blank=True)
    father_name = models.CharField(max_length=100, blank=True)
    mother_name = models.CharField(max_length=100, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    mobile_no = models.CharField(max_length=20, blank=True)
    address = models.CharField(max_length=255, blank=True)

    center_code = models.CharField(max_length=20, blank=True)  # 시험 센터 코드
    center_name = models.CharField(max_length=200, blank=True)
    academic_year = models.CharField(max_length=20, null=True, blank=True)
    enrollment_date = models.DateField(default=timezone.localdate)

    verification_status = models.CharField(
        max_length=10, choices=VerificationStatus.choices, default=VerificationStatus.PENDING
    )
    verification_date = models.DateField(null=True, blank=True)
    admin_remarks = models.TextField(blank=True)
    requires_revision = models.BooleanField(default=False)

    provisional_enrollment_number = models.CharField(max_length=100, blank=True)  # 가등록 번호
    enrollment_number = models.CharField(max_length=100, null=True, blank=True)  # 최종 등록 번호 (검증 완료 시 부여)

    high_school_marksheet_path = models.CharField(max_length=500, blank=True)
    high_school_certificate_path = models.CharField(max_length=500, blank=True)
    intermediate_marksheet_path = models.CharField(max_length=500, blank=True)
    intermediate_certificate_path = models.CharField(max_length=500, blank=True)

    @property
    def document_locations(self):
        """저장된 서류 위치 목록 (비어 있는 항목 제외)"""
        locations = (getattr(self, document_path_field(name)) for name in DOCUMENT_FIELDS)
        return [location for location in locations if location]

    def __str__(self):
        return f"{self.first_name} {self.surname}".strip()

    class Meta:
        db_table = "student"
        indexes = [
            models.Index(fields=["verification_status", "verification_date"], name="student_status_vdate_idx"),
            models.Index(fields=["verification_status", "enrollment_date"], name="student_status_edate_idx"),
        ]
