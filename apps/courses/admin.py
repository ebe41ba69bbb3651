from django.contrib import admin

from ..common.admin import BaseModelAdmin
from .models import Course, Institute


@admin.register(Institute)
class InstituteAdmin(BaseModelAdmin):
    list_display = ("institute_code", "institute_name", "district", "email")
    search_fields = ("institute_code", "institute_name")
    list_filter = ("district",)


@admin.register(Course)
class CourseAdmin(BaseModelAdmin):
    list_display = ("course_code", "course_name", "institute")
    search_fields = ("course_code", "course_name")
    list_filter = ("institute",)
