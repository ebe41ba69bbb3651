from django.contrib import admin, messages

from apps.common.admin import BaseModelAdmin

from . import services
from .models import Student


@admin.register(Student)
class StudentAdmin(BaseModelAdmin):
    """Student 모델 관리자.

    삭제 시 Object Storage 에 저장된 서류도 함께 삭제.
    """

    list_display = (
        "id",
        "first_name",
        "surname",
        "course_code",
        "institute",
        "academic_year",
        "verification_status",
        "verification_date",
        "enrollment_number",
    )
    search_fields = ("first_name", "surname", "provisional_enrollment_number", "enrollment_number")
    list_filter = ("verification_status", "academic_year", "institute", "course")
    readonly_fields = BaseModelAdmin.readonly_fields + ("provisional_enrollment_number", "enrollment_number")
    actions = ["close_stale_rejections"]

    def course_code(self, obj):
        """연결된 과정 코드를 반환.

        Args:
            obj (Student): Student 인스턴스.

        Returns:
            str: 과정 코드.
        """
        return obj.course.course_code

    course_code.short_description = "Course"

    def delete_model(self, request, obj):
        services.delete_student(obj.pk)

    def delete_queryset(self, request, queryset):
        for student in queryset:
            services.delete_student(student.pk)

    @admin.action(description="선택한 학생 중 반려 후 14일 지난 학생 CLOSED 처리")
    def close_stale_rejections(self, request, queryset):
        closed = services.close_stale_rejections(queryset)
        self.message_user(request, f"{closed}명의 학생이 CLOSED 처리되었습니다.", messages.SUCCESS)
