import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("courses", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("first_name", models.CharField(max_length=100)),
                ("surname", models.CharField(blank=True, max_length=100)),
                ("father_name", models.CharField(blank=True, max_length=100)),
                ("mother_name", models.CharField(blank=True, max_length=100)),
                ("date_of_birth", models.DateField(blank=True, null=True)),
                ("gender", models.CharField(blank=True, max_length=20)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("mobile_no", models.CharField(blank=True, max_length=20)),
                ("address", models.CharField(blank=True, max_length=255)),
                ("center_code", models.CharField(blank=True, max_length=20)),
                ("center_name", models.CharField(blank=True, max_length=200)),
                ("academic_year", models.CharField(blank=True, max_length=20, null=True)),
                ("enrollment_date", models.DateField(default=django.utils.timezone.localdate)),
                (
                    "verification_status",
                    models.CharField(
                        choices=[
                            ("PENDING", "검증 대기"),
                            ("VERIFIED", "검증 완료"),
                            ("REJECTED", "반려"),
                            ("CLOSED", "종료"),
                        ],
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                ("verification_date", models.DateField(blank=True, null=True)),
                ("admin_remarks", models.TextField(blank=True)),
                ("requires_revision", models.BooleanField(default=False)),
                ("provisional_enrollment_number", models.CharField(blank=True, max_length=100)),
                ("enrollment_number", models.CharField(blank=True, max_length=100, null=True)),
                ("high_school_marksheet_path", models.CharField(blank=True, max_length=500)),
                ("high_school_certificate_path", models.CharField(blank=True, max_length=500)),
                ("intermediate_marksheet_path", models.CharField(blank=True, max_length=500)),
                ("intermediate_certificate_path", models.CharField(blank=True, max_length=500)),
                (
                    "course",
                    models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, to="courses.course"),
                ),
                (
                    "institute",
                    models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, to="courses.institute"),
                ),
            ],
            options={
                "db_table": "student",
                "indexes": [
                    models.Index(fields=["verification_status", "verification_date"], name="student_status_vdate_idx"),
                    models.Index(fields=["verification_status", "enrollment_date"], name="student_status_edate_idx"),
                ],
            },
        ),
    ]
