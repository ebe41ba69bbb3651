from django.apps import AppConfig


class CoursesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.courses"

    # 캐시 무효화 시그널 등록
    def ready(self):
        import apps.courses.signals
