from django.contrib import admin


class BaseModelAdmin(admin.ModelAdmin):
    """관리자(is_staff) 계정만 추가 / 수정 / 삭제할 수 있는 기본 ModelAdmin."""

    readonly_fields = ("created_at", "updated_at")

    def has_add_permission(self, request):
        return request.user.is_staff

    def has_change_permission(self, request, obj=None):
        return request.user.is_staff

    def has_delete_permission(self, request, obj=None):
        return request.user.is_staff

    def has_module_permission(self, request):
        return request.user.is_staff
