import pytest
from django.core.cache import cache

from apps.courses.models import Course, Institute
from apps.courses.services import (
    course_cache_key,
    get_course_by_code,
    get_institute_by_code,
    institute_cache_key,
)

pytestmark = pytest.mark.django_db


def test_get_course_by_code_caches_id(course):
    assert get_course_by_code("CS101") == course
    assert cache.get(course_cache_key("CS101")) == course.pk


def test_get_course_by_code_unknown_returns_none(course):
    assert get_course_by_code("UNKNOWN") is None
    assert get_course_by_code("") is None
    assert get_course_by_code(None) is None


def test_get_institute_by_code(institute):
    assert get_institute_by_code("INST1") == institute
    assert get_institute_by_code("INST2") is None


def test_renamed_course_code_is_not_served_from_cache(course):
    get_course_by_code("CS101")

    course.course_code = "CS102"
    course.save()

    assert get_course_by_code("CS101") is None
    assert get_course_by_code("CS102") == course


def test_deleted_institute_cache_is_cleared(db):
    institute = Institute.objects.create(institute_code="INST9", institute_name="Temporary")
    get_institute_by_code("INST9")

    institute.delete()

    assert cache.get(institute_cache_key("INST9")) is None
    assert get_institute_by_code("INST9") is None


def test_stale_cached_id_pointing_to_other_course_is_ignored(institute):
    other = Course.objects.create(course_code="ME301", course_name="Mechanical", institute=institute)
    cache.set(course_cache_key("CS101"), other.pk)

    assert get_course_by_code("CS101") is None
