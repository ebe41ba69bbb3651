from django.db import models

from apps.common.models import BaseModel
from apps.students.models import Student


class CorrectionStatus(models.TextChoices):
    PENDING = "PENDING", "처리 대기"
    APPROVED = "APPROVED", "승인"
    REJECTED = "REJECTED", "반려"


class DataCorrectionRequest(BaseModel):
    """수험표 정보 정정 요청 모델.

    학생이 수험표에 표시된 정보의 정정을 요청하면 관리자가 승인 / 반려.
    """

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="correction_requests")
    correction_details = models.TextField()
    status = models.CharField(max_length=10, choices=CorrectionStatus.choices, default=CorrectionStatus.PENDING)
    rejection_reason = models.TextField(blank=True)

    class Meta:
        db_table = "data_correction_request"
        ordering = ["-created_at"]
