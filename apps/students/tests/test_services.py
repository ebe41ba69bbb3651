import re
from datetime import timedelta
from unittest import mock

import pytest
from django.utils import timezone

from apps.common.exceptions import (
    DocumentStoreError,
    DomainValidationError,
    InvalidStatusTransition,
    NotFoundError,
)
from apps.courses.models import Course
from apps.students import services
from apps.students.models import DOCUMENT_FIELDS, Student, VerificationStatus

pytestmark = pytest.mark.django_db

UUID_PATTERN = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"


def enrollment_data(**overrides):
    data = {
        "institute_code": "INST1",
        "course_code": "CS101",
        "first_name": "Asha",
        "surname": "Verma",
        "center_code": "C01",
        "academic_year": "2024-25",
    }
    data.update(overrides)
    return data


class TestEnrollStudent:
    def test_enroll_sets_pending_and_provisional_number(self, course, documents, document_store):
        student = services.enroll_student(enrollment_data(), documents, store=document_store)

        student.refresh_from_db()
        assert student.verification_status == VerificationStatus.PENDING
        assert student.verification_date == timezone.localdate()
        assert re.fullmatch(rf"CS101-{UUID_PATTERN}", student.provisional_enrollment_number)
        assert student.enrollment_number is None
        assert student.institute.institute_code == "INST1"
        assert student.course == course
        assert document_store.store.call_count == len(DOCUMENT_FIELDS)
        assert len(student.document_locations) == len(DOCUMENT_FIELDS)
        assert student.high_school_marksheet_path.endswith("high_school_marksheet.pdf")

    def test_provisional_numbers_are_unique(self, course, document_store, upload):
        first = services.enroll_student(
            enrollment_data(), {name: upload() for name in DOCUMENT_FIELDS}, store=document_store
        )
        second = services.enroll_student(
            enrollment_data(), {name: upload() for name in DOCUMENT_FIELDS}, store=document_store
        )

        assert first.provisional_enrollment_number != second.provisional_enrollment_number

    def test_unknown_course_raises_not_found_without_persisting(self, course, documents, document_store):
        with pytest.raises(NotFoundError):
            services.enroll_student(enrollment_data(course_code="UNKNOWN"), documents, store=document_store)

        assert Student.objects.count() == 0
        document_store.store.assert_not_called()

    def test_unknown_institute_raises_not_found_without_persisting(self, course, documents, document_store):
        with pytest.raises(NotFoundError):
            services.enroll_student(enrollment_data(institute_code="NOPE"), documents, store=document_store)

        assert Student.objects.count() == 0
        document_store.store.assert_not_called()

    def test_missing_document_raises_validation_error(self, course, documents, document_store):
        documents.pop("intermediate_certificate")

        with pytest.raises(DomainValidationError):
            services.enroll_student(enrollment_data(), documents, store=document_store)

        assert Student.objects.count() == 0

    def test_upload_failure_cleans_up_stored_documents(self, course, documents, document_store):
        document_store.store.side_effect = [
            "https://storage.test/bucket/a.pdf",
            "https://storage.test/bucket/b.pdf",
            DocumentStoreError("업로드 실패"),
        ]

        with pytest.raises(DocumentStoreError):
            services.enroll_student(enrollment_data(), documents, store=document_store)

        assert Student.objects.count() == 0
        assert document_store.delete.call_args_list == [
            mock.call("https://storage.test/bucket/a.pdf"),
            mock.call("https://storage.test/bucket/b.pdf"),
        ]


class TestUpdateStudent:
    def test_update_replaces_document_and_resets_to_pending(self, make_student, document_store, upload):
        student = make_student(
            verification_status=VerificationStatus.REJECTED,
            verification_date=timezone.localdate() - timedelta(days=3),
            requires_revision=True,
        )
        old_location = student.high_school_marksheet_path

        updated = services.update_student(
            student.pk,
            {"first_name": "Asha Rani"},
            {"high_school_marksheet": upload("new_marksheet.pdf")},
            store=document_store,
        )

        assert updated.verification_status == VerificationStatus.PENDING
        assert updated.verification_date == timezone.localdate()
        assert updated.first_name == "Asha Rani"
        assert updated.high_school_marksheet_path.endswith("new_marksheet.pdf")
        # 기존 파일 삭제가 새 파일 업로드보다 먼저
        assert document_store.method_calls[0] == mock.call.delete(old_location)
        assert document_store.method_calls[1][0] == "store"
        document_store.delete.assert_called_once_with(old_location)

    def test_update_without_documents_keeps_locations(self, make_student, document_store):
        student = make_student()
        before = student.document_locations

        updated = services.update_student(student.pk, {"mobile_no": "9999999999"}, {}, store=document_store)

        assert updated.document_locations == before
        document_store.store.assert_not_called()
        document_store.delete.assert_not_called()

    def test_update_can_move_student_to_another_course(self, make_student, institute, document_store):
        student = make_student()
        Course.objects.create(course_code="EE201", course_name="Electrical", institute=institute)

        updated = services.update_student(student.pk, {"course_code": "EE201"}, {}, store=document_store)

        assert updated.course.course_code == "EE201"

    def test_update_unknown_student_raises_not_found(self, db, document_store):
        with pytest.raises(NotFoundError):
            services.update_student(9999, {}, {}, store=document_store)

    def test_update_with_unknown_course_leaves_documents_untouched(self, make_student, document_store, upload):
        student = make_student()

        with pytest.raises(NotFoundError):
            services.update_student(
                student.pk,
                {"course_code": "UNKNOWN"},
                {"high_school_marksheet": upload()},
                store=document_store,
            )

        document_store.delete.assert_not_called()
        document_store.store.assert_not_called()

    def test_closed_student_cannot_be_updated(self, make_student, document_store, upload):
        student = make_student(verification_status=VerificationStatus.CLOSED)

        with pytest.raises(InvalidStatusTransition):
            services.update_student(
                student.pk,
                {"mobile_no": "1111111111"},
                {"high_school_marksheet": upload()},
                store=document_store,
            )

        student.refresh_from_db()
        assert student.verification_status == VerificationStatus.CLOSED
        assert student.mobile_no != "1111111111"
        document_store.delete.assert_not_called()
        document_store.store.assert_not_called()

    def test_blank_academic_year_is_saved_as_null(self, make_student, document_store):
        student = make_student()

        updated = services.update_student(student.pk, {"academic_year": "  "}, {}, store=document_store)

        updated.refresh_from_db()
        assert updated.academic_year is None
        assert [s.pk for s in services.get_filtered_students(academic_year="")] == [student.pk]

    def test_failed_replacement_cleans_up_new_documents(self, make_student, document_store, upload):
        student = make_student(
            verification_status=VerificationStatus.REJECTED,
            verification_date=timezone.localdate() - timedelta(days=3),
            requires_revision=True,
        )
        old_marksheet = student.high_school_marksheet_path
        old_certificate = student.high_school_certificate_path
        document_store.store.side_effect = [
            "https://storage.test/bucket/students/documents/new1.pdf",
            DocumentStoreError("업로드 실패"),
        ]

        with pytest.raises(DocumentStoreError):
            services.update_student(
                student.pk,
                {"first_name": "Changed"},
                {
                    "high_school_marksheet": upload("new1.pdf"),
                    "high_school_certificate": upload("new2.pdf"),
                },
                store=document_store,
            )

        assert document_store.delete.call_args_list == [
            mock.call(old_marksheet),
            mock.call(old_certificate),
            mock.call("https://storage.test/bucket/students/documents/new1.pdf"),
        ]
        student.refresh_from_db()
        assert student.verification_status == VerificationStatus.REJECTED
        assert student.first_name == "Asha"
        # 삭제된 기존 파일은 경로를 비우고, 교체 대상이 아니었던 서류는 그대로
        assert student.high_school_marksheet_path == ""
        assert student.high_school_certificate_path == ""
        assert student.intermediate_marksheet_path.endswith("old_intermediate_marksheet.pdf")

    def test_failed_delete_of_old_document_keeps_path(self, make_student, document_store, upload):
        student = make_student()
        old_marksheet = student.high_school_marksheet_path
        document_store.delete.side_effect = DocumentStoreError("삭제 실패")

        with pytest.raises(DocumentStoreError):
            services.update_student(
                student.pk, {}, {"high_school_marksheet": upload()}, store=document_store
            )

        student.refresh_from_db()
        assert student.high_school_marksheet_path == old_marksheet
        document_store.store.assert_not_called()


class TestDeleteStudent:
    def test_delete_removes_documents_and_record(self, make_student, document_store):
        student = make_student()
        locations = student.document_locations

        services.delete_student(student.pk, store=document_store)

        assert not Student.objects.filter(pk=student.pk).exists()
        assert document_store.delete.call_args_list == [mock.call(location) for location in locations]

    def test_delete_keeps_record_when_storage_fails(self, make_student, document_store):
        student = make_student()
        document_store.delete.side_effect = DocumentStoreError("삭제 실패")

        with pytest.raises(DocumentStoreError):
            services.delete_student(student.pk, store=document_store)

        assert Student.objects.filter(pk=student.pk).exists()

    def test_delete_unknown_student_raises_not_found(self, db, document_store):
        with pytest.raises(NotFoundError):
            services.delete_student(12345, store=document_store)


class TestVerifyStudent:
    def test_verified_assigns_final_enrollment_number(self, make_student):
        student = make_student(center_code="C07")

        verified = services.verify_student(student.pk, VerificationStatus.VERIFIED, "서류 확인 완료")

        today = timezone.localdate()
        assert verified.verification_status == VerificationStatus.VERIFIED
        assert verified.enrollment_number == f"EN{today.year}C07{student.pk}"
        assert verified.admin_remarks == "서류 확인 완료"
        assert verified.verification_date == today
        assert verified.requires_revision is False

    def test_rejected_flags_revision_without_enrollment_number(self, make_student):
        student = make_student()

        rejected = services.verify_student(student.pk, VerificationStatus.REJECTED, "성적표 불명확")

        rejected.refresh_from_db()
        assert rejected.verification_status == VerificationStatus.REJECTED
        assert rejected.requires_revision is True
        assert rejected.enrollment_number is None
        assert rejected.admin_remarks == "성적표 불명확"

    def test_unknown_student_raises_not_found(self, db):
        with pytest.raises(NotFoundError):
            services.verify_student(4242, VerificationStatus.VERIFIED, "")

    @pytest.mark.parametrize("decision", [VerificationStatus.PENDING, VerificationStatus.CLOSED, "APPROVED"])
    def test_invalid_decision_raises_validation_error(self, make_student, decision):
        student = make_student()

        with pytest.raises(DomainValidationError):
            services.verify_student(student.pk, decision, "")

    @pytest.mark.parametrize(
        "current_status",
        [VerificationStatus.VERIFIED, VerificationStatus.REJECTED, VerificationStatus.CLOSED],
    )
    def test_only_pending_students_can_be_verified(self, make_student, current_status):
        student = make_student(verification_status=current_status)

        with pytest.raises(InvalidStatusTransition):
            services.verify_student(student.pk, VerificationStatus.VERIFIED, "")

        student.refresh_from_db()
        assert student.verification_status == current_status


class TestCloseStaleRejections:
    def test_closes_rejections_older_than_fourteen_days(self, make_student):
        today = timezone.localdate()
        stale = make_student(
            verification_status=VerificationStatus.REJECTED, verification_date=today - timedelta(days=15)
        )
        recent = make_student(
            verification_status=VerificationStatus.REJECTED, verification_date=today - timedelta(days=10)
        )
        boundary = make_student(
            verification_status=VerificationStatus.REJECTED, verification_date=today - timedelta(days=14)
        )
        old_pending = make_student(
            verification_status=VerificationStatus.PENDING, verification_date=today - timedelta(days=30)
        )

        closed = services.close_stale_rejections()

        assert closed == 1
        stale.refresh_from_db()
        recent.refresh_from_db()
        boundary.refresh_from_db()
        old_pending.refresh_from_db()
        assert stale.verification_status == VerificationStatus.CLOSED
        assert recent.verification_status == VerificationStatus.REJECTED
        assert boundary.verification_status == VerificationStatus.REJECTED
        assert old_pending.verification_status == VerificationStatus.PENDING

    def test_nothing_to_close(self, db):
        assert services.close_stale_rejections() == 0

    def test_closes_only_within_given_queryset(self, make_student):
        stale_date = timezone.localdate() - timedelta(days=20)
        selected = make_student(verification_status=VerificationStatus.REJECTED, verification_date=stale_date)
        other = make_student(verification_status=VerificationStatus.REJECTED, verification_date=stale_date)

        closed = services.close_stale_rejections(Student.objects.filter(pk=selected.pk))

        assert closed == 1
        selected.refresh_from_db()
        other.refresh_from_db()
        assert selected.verification_status == VerificationStatus.CLOSED
        assert other.verification_status == VerificationStatus.REJECTED


class TestQueries:
    def test_pending_over_21_days(self, make_student, institute):
        today = timezone.localdate()
        overdue = make_student(enrollment_date=today - timedelta(days=22))
        exactly = make_student(enrollment_date=today - timedelta(days=21))
        make_student(enrollment_date=today - timedelta(days=10))
        make_student(enrollment_date=today - timedelta(days=40), verification_status=VerificationStatus.VERIFIED)

        result = list(services.get_students_pending_over_21_days())

        assert {s.pk for s in result} == {overdue.pk, exactly.pk}

    def test_pending_over_21_days_filters(self, make_student, institute):
        today = timezone.localdate()
        other_course = Course.objects.create(course_code="ME301", course_name="Mechanical", institute=institute)
        target = make_student(enrollment_date=today - timedelta(days=30), academic_year="2023-24")
        make_student(enrollment_date=today - timedelta(days=30), academic_year="2024-25")
        make_student(enrollment_date=today - timedelta(days=30), academic_year="2023-24", course=other_course)
        no_year = make_student(enrollment_date=today - timedelta(days=30), academic_year=None)

        by_course_and_year = services.get_students_pending_over_21_days(
            course_id=target.course_id, academic_year="2023-24"
        )
        by_blank_year = services.get_students_pending_over_21_days(academic_year="  ")

        assert [s.pk for s in by_course_and_year] == [target.pk]
        assert [s.pk for s in by_blank_year] == [no_year.pk]

    def test_filtered_students_combines_present_filters(self, make_student, institute):
        other_course = Course.objects.create(course_code="ME301", course_name="Mechanical", institute=institute)
        a = make_student(verification_status=VerificationStatus.REJECTED)
        b = make_student(course=other_course, verification_status=VerificationStatus.REJECTED)
        c = make_student(academic_year="2023-24")

        assert [s.pk for s in services.get_filtered_students()] == [a.pk, b.pk, c.pk]
        assert [s.pk for s in services.get_filtered_students(institute_id=institute.pk)] == [a.pk, b.pk, c.pk]
        assert [
            s.pk
            for s in services.get_filtered_students(
                course_id=a.course_id, verification_status=VerificationStatus.REJECTED
            )
        ] == [a.pk]
        assert [s.pk for s in services.get_filtered_students(academic_year="2023-24")] == [c.pk]
        assert list(services.get_filtered_students(academic_year="")) == []

    def test_find_by_verification_status(self, make_student):
        rejected = make_student(verification_status=VerificationStatus.REJECTED)
        make_student()

        assert [s.pk for s in services.find_by_verification_status(VerificationStatus.REJECTED)] == [rejected.pk]

    def test_get_student_not_found(self, db):
        with pytest.raises(NotFoundError):
            services.get_student(777)
