from rest_framework import serializers

from .models import DataCorrectionRequest


class DataCorrectionRequestSerializer(serializers.ModelSerializer):
    student_id = serializers.PrimaryKeyRelatedField(source="student", read_only=True)

    class Meta:
        model = DataCorrectionRequest
        fields = ["id", "student_id", "correction_details", "status", "rejection_reason", "created_at"]


class DataCorrectionCreateSerializer(serializers.Serializer):
    student_id = serializers.IntegerField()
    correction_details = serializers.CharField()
