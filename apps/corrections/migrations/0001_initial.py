import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DataCorrectionRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("correction_details", models.TextField()),
                (
                    "status",
                    models.CharField(
                        choices=[("PENDING", "처리 대기"), ("APPROVED", "승인"), ("REJECTED", "반려")],
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                ("rejection_reason", models.TextField(blank=True)),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="correction_requests",
                        to="students.student",
                    ),
                ),
            ],
            options={
                "db_table": "data_correction_request",
                "ordering": ["-created_at"],
            },
        ),
    ]
