from django.core.cache import cache

from .models import Course, Institute

CACHE_TIMEOUT = 3600


def institute_cache_key(institute_code):
    return f"institute_code:{institute_code}"


def course_cache_key(course_code):
    return f"course_code:{course_code}"


def get_institute_by_code(institute_code):
    """기관 코드로 Institute 조회. 없으면 None"""
    if not institute_code:
        return None

    cache_key = institute_cache_key(institute_code)
    institute_id = cache.get(cache_key)
    if institute_id is not None:
        institute = Institute.objects.filter(pk=institute_id).first()
        if institute is not None and institute.institute_code == institute_code:
            return institute

    institute = Institute.objects.filter(institute_code=institute_code).first()
    if institute is not None:
        cache.set(cache_key, institute.pk, timeout=CACHE_TIMEOUT)
    return institute


def get_course_by_code(course_code):
    """과정 코드로 Course 조회. 없으면 None"""
    if not course_code:
        return None

    cache_key = course_cache_key(course_code)
    course_id = cache.get(cache_key)
    if course_id is not None:
        course = Course.objects.filter(pk=course_id).first()
        if course is not None and course.course_code == course_code:
            return course

    course = Course.objects.filter(course_code=course_code).first()
    if course is not None:
        cache.set(cache_key, course.pk, timeout=CACHE_TIMEOUT)
    return course
