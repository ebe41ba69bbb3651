import itertools
from unittest import mock

import pytest
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from apps.common.storage import DocumentStore
from apps.courses.models import Course, Institute
from apps.students.models import DOCUMENT_FIELDS, Student
from apps.users.models import Admin

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def admin_user(db):
    return Admin.objects.create_user("admin", "admin-password-1!", name="관리자")


@pytest.fixture
def api_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def institute(db):
    return Institute.objects.create(institute_code="INST1", institute_name="Government Polytechnic")


@pytest.fixture
def course(institute):
    return Course.objects.create(course_code="CS101", course_name="Computer Science", institute=institute)


@pytest.fixture
def document_store():
    """업로드 할 때마다 고유한 location 을 돌려주는 저장소 mock"""
    store = mock.MagicMock(spec=DocumentStore)
    counter = itertools.count(1)
    store.store.side_effect = lambda content, filename: (
        f"https://storage.test/bucket/students/documents/{next(counter)}_{filename}"
    )
    return store


def make_upload(name="document.pdf"):
    return SimpleUploadedFile(name, PDF_BYTES, content_type="application/pdf")


@pytest.fixture
def upload():
    return make_upload


@pytest.fixture
def documents():
    return {name: make_upload(f"{name}.pdf") for name in DOCUMENT_FIELDS}


@pytest.fixture
def make_student(institute, course):
    def _make_student(**kwargs):
        kwargs.setdefault("institute", institute)
        kwargs.setdefault("course", course)
        kwargs.setdefault("first_name", "Asha")
        kwargs.setdefault("surname", "Verma")
        kwargs.setdefault("center_code", "C01")
        kwargs.setdefault("academic_year", "2024-25")
        kwargs.setdefault("provisional_enrollment_number", f"{course.course_code}-provisional")
        for name in DOCUMENT_FIELDS:
            kwargs.setdefault(f"{name}_path", f"https://storage.test/bucket/students/documents/old_{name}.pdf")
        return Student.objects.create(**kwargs)

    return _make_student
