import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("exams_admissions")

# settings.py 의 CELERY_ 로 시작하는 설정을 사용
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
