from django.db import models

from apps.common.models import BaseModel


class Institute(BaseModel):
    institute_code = models.CharField(max_length=30, unique=True)  # 기관 코드
    institute_name = models.CharField(max_length=200)
    address = models.CharField(max_length=255, blank=True)
    district = models.CharField(max_length=100, blank=True)
    email = models.EmailField(blank=True)

    def __str__(self):
        return f"{self.institute_code} - {self.institute_name}"

    class Meta:
        db_table = "institute"


class Course(BaseModel):
    course_code = models.CharField(max_length=30, unique=True)  # 과정 코드
    course_name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    institute = models.ForeignKey(Institute, on_delete=models.SET_NULL, null=True, blank=True)

    def __str__(self):
        return f"{self.course_code} - {self.course_name}"

    class Meta:
        db_table = "course"
