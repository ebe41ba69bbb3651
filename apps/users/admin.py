from django.contrib import admin
from django.contrib.auth.hashers import make_password

from apps.common.admin import BaseModelAdmin

from .models import Admin


@admin.register(Admin)
class AdminAccountAdmin(BaseModelAdmin):
    # 표시할 컬럼
    list_display = ("username", "name", "email", "is_staff", "is_active", "is_superuser")
    # 검색 기능 설정
    search_fields = ("username", "name", "email")
    # 필터링 조건
    list_filter = ("is_active", "is_staff", "is_superuser")
    exclude = ("groups", "user_permissions", "last_login")

    def save_model(self, request, obj, form, change):
        """비밀번호가 평문으로 입력된 경우 해싱 후 저장"""
        if "password" in form.changed_data:
            obj.password = make_password(obj.password)
        super().save_model(request, obj, form, change)
