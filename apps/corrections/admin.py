from django.contrib import admin

from apps.common.admin import BaseModelAdmin

from .models import DataCorrectionRequest


@admin.register(DataCorrectionRequest)
class DataCorrectionRequestAdmin(BaseModelAdmin):
    list_display = ("id", "student", "status", "created_at", "updated_at")
    search_fields = ("student__first_name", "student__surname", "correction_details")
    list_filter = ("status",)
