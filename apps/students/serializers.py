from rest_framework import serializers

from apps.courses.serializers import CourseSerializer, InstituteSerializer

from .models import DOCUMENT_FIELDS, Student, VerificationStatus


class StudentSerializer(serializers.ModelSerializer):
    """학생 조회 Serializer (기관 / 과정 정보 포함)"""

    institute = InstituteSerializer(read_only=True)
    course = CourseSerializer(read_only=True)

    class Meta:
        model = Student
        fields = [
            "id",
            "institute",
            "course",
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
            "verification_status",
            "verification_date",
            "admin_remarks",
            "requires_revision",
            "provisional_enrollment_number",
            "enrollment_number",
            "high_school_marksheet_path",
            "high_school_certificate_path",
            "intermediate_marksheet_path",
            "intermediate_certificate_path",
        ]


class StudentWriteSerializer(serializers.ModelSerializer):
    """학생 등록 / 수정 입력 Serializer.

    등록 시에는 기관 / 과정 코드와 서류 4종이 모두 필요하며,
    수정 시에는 partial=True 로 사용하여 전달된 항목만 반영.
    """

    institute_code = serializers.CharField(write_only=True)
    course_code = serializers.CharField(write_only=True)
    high_school_marksheet = serializers.FileField(write_only=True)
    high_school_certificate = serializers.FileField(write_only=True)
    intermediate_marksheet = serializers.FileField(write_only=True)
    intermediate_certificate = serializers.FileField(write_only=True)

    class Meta:
        model = Student
        fields = [
            "institute_code",
            "course_code",
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
            *DOCUMENT_FIELDS,
        ]

    def split_documents(self):
        """validated_data 를 (학생 정보, 서류) 두 dict 로 분리"""
        data = dict(self.validated_data)
        documents = {name: data.pop(name) for name in DOCUMENT_FIELDS if name in data}
        return data, documents


class StudentVerificationSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[VerificationStatus.VERIFIED, VerificationStatus.REJECTED])
    remarks = serializers.CharField(required=False, allow_blank=True, default="")
