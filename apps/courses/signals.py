import logging

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from apps.courses.models import Course, Institute
from apps.courses.services import course_cache_key, institute_cache_key

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Institute)
def track_institute_code_change(sender, instance, **kwargs):
    """institute_code 가 바뀌는 경우 이전 코드의 캐시도 지우기 위해 저장"""
    if instance.pk:
        instance._institute_code_was = (
            Institute.objects.filter(pk=instance.pk).values_list("institute_code", flat=True).first()
        )


@receiver(post_save, sender=Institute)
@receiver(post_delete, sender=Institute)
def handle_institute_change(sender, instance, **kwargs):
    keys = {institute_cache_key(instance.institute_code)}
    old_code = getattr(instance, "_institute_code_was", None)
    if old_code:
        keys.add(institute_cache_key(old_code))
    cache.delete_many(list(keys))
    logger.debug("Institute cache cleared: %s", keys)


@receiver(pre_save, sender=Course)
def track_course_code_change(sender, instance, **kwargs):
    """course_code 가 바뀌는 경우 이전 코드의 캐시도 지우기 위해 저장"""
    if instance.pk:
        instance._course_code_was = Course.objects.filter(pk=instance.pk).values_list("course_code", flat=True).first()


@receiver(post_save, sender=Course)
@receiver(post_delete, sender=Course)
def handle_course_change(sender, instance, **kwargs):
    keys = {course_cache_key(instance.course_code)}
    old_code = getattr(instance, "_course_code_was", None)
    if old_code:
        keys.add(course_cache_key(old_code))
    cache.delete_many(list(keys))
    logger.debug("Course cache cleared: %s", keys)
