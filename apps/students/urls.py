from django.urls import path

from .views import (
    StudentDetailView,
    StudentListCreateView,
    StudentPendingView,
    StudentVerifyView,
)

urlpatterns = [
    # 학생 등록 신청 / 목록 조회
    path("students/", StudentListCreateView.as_view(), name="student-list"),
    # 21일 이상 검증 대기 학생
    path("students/pending/", StudentPendingView.as_view(), name="student-pending"),
    path("students/<int:student_id>/", StudentDetailView.as_view(), name="student-detail"),
    # 검증 (승인 / 반려)
    path("students/<int:student_id>/verify/", StudentVerifyView.as_view(), name="student-verify"),
]
