"""Tests for profile updates, federated sync, export and integrity check."""

import datetime

import pytest

from app.core.exceptions import ConflictError
from app.db.repositories.challenge_enrollment import ChallengeEnrollmentRepository
from app.db.repositories.user import UserRepository
from app.schemas.auth import FederatedSyncRequest
from app.schemas.user import OnboardingRequest
from app.services.progress_service import ProgressService
from app.services.user_service import UserService, split_name

DAY = datetime.date(2026, 3, 1)


@pytest.fixture
def user(db):
    return UserRepository(db).ensure_exists("u1", first_name="New User", last_name="")


@pytest.fixture
def service(db):
    return UserService(db)


class TestSplitName:
    def test_first_and_rest(self):
        assert split_name("Ada Lovelace King") == ("Ada", "Lovelace King")

    def test_single_word(self):
        assert split_name("Ada") == ("Ada", "")


class TestOnboarding:
    def test_completes_profile(self, service, user):
        data = OnboardingRequest(name="Ada Lovelace", age="25-34", wellness_goals=["focus"],
                                 preferred_time="morning", motivation="calm")
        updated = service.complete_onboarding(user, data)
        assert updated.first_name == "Ada"
        assert updated.last_name == "Lovelace"
        assert updated.onboarding_complete is True

    def test_partial_answers_are_incomplete(self, service, user):
        updated = service.complete_onboarding(user, OnboardingRequest(name="Ada"))
        assert updated.onboarding_complete is False


class TestFederatedProfile:
    def test_writes_supplied_fields_only(self, service, user):
        user.motivation = "calm"
        data = FederatedSyncRequest(uid="u1", email="ada@example.com", first_name="Ada")
        updated = service.apply_federated_profile(user, data)
        assert updated.email == "ada@example.com"
        assert updated.first_name == "Ada"
        assert updated.last_name == ""
        assert updated.motivation == "calm"

    def test_email_owned_by_another_user(self, service, user, db):
        UserRepository(db).ensure_exists("u2", email="ada@example.com")
        with pytest.raises(ConflictError):
            service.apply_federated_profile(user, FederatedSyncRequest(uid="u1", email="ada@example.com"))

    def test_conflict_check_writes_nothing(self, service, db):
        UserRepository(db).ensure_exists("u2", email="ada@example.com")
        with pytest.raises(ConflictError):
            service.check_federated_conflicts("new-uid", FederatedSyncRequest(uid="new-uid", email="ada@example.com"))
        assert UserRepository(db).get_by_id("new-uid") is None

    def test_own_email_is_not_a_conflict(self, service, db):
        UserRepository(db).ensure_exists("u2", email="ada@example.com")
        service.check_federated_conflicts("u2", FederatedSyncRequest(uid="u2", email="ada@example.com"))


class TestLanguage:
    def test_update(self, service, user):
        assert service.update_language(user, "fr").preferred_language == "fr"


class TestExportAndIntegrity:
    def test_export(self, service, user, db):
        ProgressService(db).record_completion(user.id, "mindful-week", DAY, today=DAY)
        export = service.export_data(user.id)
        assert export.user.id == "u1"
        assert export.data_snapshot.total_enrollments == 1
        assert export.data_snapshot.total_progress_entries == 1
        assert export.data_snapshot.completed_challenges == 0
        assert export.progress[0].date == DAY

    def test_integrity_healthy(self, service, user, db):
        ProgressService(db).record_completion(user.id, "mindful-week", DAY, today=DAY)
        report = service.data_integrity(user.id)
        assert report.status == "healthy"
        assert report.data_integrity.total_enrollments == 1
        assert report.data_integrity.total_progress_entries == 1

    def test_integrity_reports_drift(self, service, user, db):
        ProgressService(db).record_completion(user.id, "mindful-week", DAY, today=DAY)
        ChallengeEnrollmentRepository(db).set_completed_count(user.id, "mindful-week", 3)
        report = service.data_integrity(user.id)
        assert report.status == "drifted"
        assert report.drifted_challenges == ["mindful-week"]
