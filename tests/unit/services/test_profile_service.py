"""Unit tests for ProfileService."""

from datetime import UTC, date, datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from core.exceptions import (
    DomainValidationError,
    InvalidPhoneNumberError,
    ProfileAlreadyCreatedError,
    ProfileCreationError,
    ProfileCreationNotFoundError,
    ProfileNotFoundError,
    UnsupportedCountryError,
    UsernameChangeCooldownError,
    UsernameNotUniqueError,
)
from domain.entities.profile import Profile
from domain.entities.profile_creation import CreatePersonProfile, ProfileCreationStatus
from domain.events.profile_events import (
    ProfileCreationCompleted,
    ProfileCreationFailed,
    ProfileCreationInitiated,
    ProfileField,
    ProfileFieldChanged,
)
from domain.services.profile_service import ProfileService
from domain.specifications.phone_number import BulgarianPhoneNumberSpecification
from domain.value_objects.country import IsoCountry
from domain.value_objects.identifiers import AggregateId, ProfileId, UserId
from domain.value_objects.names import NameField, Username
from domain.value_objects.personal import GenderType
from domain.value_objects.phone_number import PhoneNumber
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def publisher() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(
    uow: FakeUnitOfWork, phone_specifications, file_inspector, publisher: MagicMock
) -> ProfileService:
    return ProfileService(
        lambda: uow,
        phone_specifications,
        file_inspector=file_inspector,
        event_publisher=publisher,
    )


def _published(publisher: MagicMock) -> list:
    return [event for call in publisher.publish.call_args_list for event in call.args[0]]


def _stored_profile(username: str | None = None, updated_at: datetime | None = None) -> Profile:
    return Profile.from_persistence(
        id=ProfileId.generate(),
        first_name=NameField("Maria"),
        last_name=NameField("Ivanova"),
        phone_number=PhoneNumber("0888123456", BulgarianPhoneNumberSpecification()),
        username=Username(username) if username else None,
        version=2,
        updated_at=updated_at or datetime.now(UTC) - timedelta(days=90),
    )


# --- start_profile_creation ---


class TestStartProfileCreation:
    def test_stores_process_and_publishes_initiated(
        self, service: ProfileService, uow: FakeUnitOfWork, publisher: MagicMock, user_id: UserId
    ):
        process = service.start_profile_creation(
            user_id, "maria", "ivanova", "0888123456", IsoCountry.BULGARIA
        )

        assert process.status is ProfileCreationStatus.INITIATED
        assert process.first_name == NameField("Maria")
        uow.profile_creations.add.assert_called_once_with(process)
        assert uow.committed

        events = _published(publisher)
        assert len(events) == 1
        assert isinstance(events[0], ProfileCreationInitiated)
        assert not process.has_pending_events

    def test_attaches_optional_fields(
        self, service: ProfileService, user_id: UserId
    ):
        process = service.start_profile_creation(
            user_id,
            "maria",
            "ivanova",
            "0888123456",
            IsoCountry.BULGARIA,
            middle_name="petrova",
            username="maria_i",
            avatar_path=Path("/avatars/me.png"),
            date_of_birth=date(1990, 5, 17),
            gender=GenderType.FEMALE,
        )

        assert process.middle_name == NameField("Petrova")
        assert process.username == Username("maria_i")
        assert process.avatar is not None
        assert process.date_of_birth is not None
        assert process.gender is not None
        assert process.version == 6

    def test_invalid_input_is_not_stored(
        self, service: ProfileService, uow: FakeUnitOfWork, publisher: MagicMock, user_id: UserId
    ):
        with pytest.raises(DomainValidationError, match="Username"):
            service.start_profile_creation(
                user_id, "Maria", "Ivanova", "0888123456", IsoCountry.BULGARIA, username="x"
            )

        uow.profile_creations.add.assert_not_called()
        assert not uow.committed
        publisher.publish.assert_not_called()

    def test_invalid_avatar_is_rejected(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UserId
    ):
        with pytest.raises(DomainValidationError, match="Invalid avatar file"):
            service.start_profile_creation(
                user_id,
                "Maria",
                "Ivanova",
                "0888123456",
                IsoCountry.BULGARIA,
                avatar_path=Path("/avatars/missing.png"),
            )
        uow.profile_creations.add.assert_not_called()


# --- complete_profile_creation ---


class TestCompleteProfileCreation:
    def _process(self, phone_specifications, raw_phone_number: str = "0888123456", **optional):
        process = CreatePersonProfile.initiate(
            UserId.generate(),
            NameField("Maria"),
            NameField("Ivanova"),
            raw_phone_number,
            IsoCountry.BULGARIA,
            phone_specifications,
        )
        if "username" in optional:
            process.set_username(Username(optional["username"]))
        process.drain_events()
        return process

    def test_success_stores_profile_and_process(
        self, service: ProfileService, uow: FakeUnitOfWork, publisher: MagicMock, phone_specifications
    ):
        process = self._process(phone_specifications)
        uow.profile_creations.get.return_value = process

        profile = service.complete_profile_creation(process.id)

        assert profile.phone_number.value == "+359888123456"
        uow.profiles.add.assert_called_once_with(profile)
        uow.profile_creations.update.assert_called_once_with(process)
        assert uow.committed
        assert process.status is ProfileCreationStatus.COMPLETED

        events = _published(publisher)
        assert [type(e) for e in events] == [ProfileCreationCompleted]

    def test_checks_username_against_repository(
        self, service: ProfileService, uow: FakeUnitOfWork, phone_specifications
    ):
        process = self._process(phone_specifications, username="maria_i")
        uow.profile_creations.get.return_value = process

        service.complete_profile_creation(process.id)

        uow.profiles.exists_by_username.assert_called_once_with("maria_i")

    def test_taken_username_fails_process(
        self, service: ProfileService, uow: FakeUnitOfWork, publisher: MagicMock, phone_specifications
    ):
        process = self._process(phone_specifications, username="maria_i")
        uow.profile_creations.get.return_value = process
        uow.profiles.exists_by_username.return_value = True

        with pytest.raises(ProfileCreationError, match="already taken"):
            service.complete_profile_creation(process.id)

        assert process.status is ProfileCreationStatus.FAILED
        uow.profiles.add.assert_not_called()

    def test_failure_is_persisted_and_published(
        self, service: ProfileService, uow: FakeUnitOfWork, publisher: MagicMock, phone_specifications
    ):
        process = self._process(phone_specifications, raw_phone_number="123")
        uow.profile_creations.get.return_value = process

        with pytest.raises(ProfileCreationError, match="Invalid phone number for country: Bulgaria"):
            service.complete_profile_creation(process.id)

        uow.profile_creations.update.assert_called_once_with(process)
        uow.profiles.add.assert_not_called()
        assert uow.committed
        events = _published(publisher)
        assert len(events) == 1
        assert isinstance(events[0], ProfileCreationFailed)

    def test_completed_process_is_rejected(
        self, service: ProfileService, uow: FakeUnitOfWork, always_unique, phone_specifications
    ):
        process = self._process(phone_specifications)
        process.create_profile(always_unique)
        uow.profile_creations.get.return_value = process

        with pytest.raises(ProfileAlreadyCreatedError):
            service.complete_profile_creation(process.id)
        assert not uow.committed

    def test_missing_process(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profile_creations.get.return_value = None

        with pytest.raises(ProfileCreationNotFoundError):
            service.complete_profile_creation(AggregateId.generate())


# --- change_username ---


class TestChangeUsername:
    def test_changes_and_commits(
        self, service: ProfileService, uow: FakeUnitOfWork, publisher: MagicMock
    ):
        profile = _stored_profile(username="alice")
        uow.profiles.get.return_value = profile

        result = service.change_username(profile.id, "bob_2")

        assert result.username == Username("bob_2")
        uow.profiles.update.assert_called_once_with(profile)
        assert uow.committed
        events = _published(publisher)
        assert len(events) == 1
        assert events[0].field is ProfileField.USERNAME

    def test_rejects_taken_username(self, service: ProfileService, uow: FakeUnitOfWork):
        profile = _stored_profile(username="alice")
        uow.profiles.get.return_value = profile
        uow.profiles.exists_by_username.return_value = True

        with pytest.raises(UsernameNotUniqueError):
            service.change_username(profile.id, "bob_2")

        assert profile.username == Username("alice")
        assert not uow.committed

    def test_cooldown_propagates(self, service: ProfileService, uow: FakeUnitOfWork):
        profile = _stored_profile(username="alice", updated_at=datetime.now(UTC))
        uow.profiles.get.return_value = profile

        with pytest.raises(UsernameChangeCooldownError):
            service.change_username(profile.id, "bob_2")

        uow.profiles.update.assert_not_called()
        assert not uow.committed

    def test_invalid_username(self, service: ProfileService, uow: FakeUnitOfWork):
        with pytest.raises(DomainValidationError):
            service.change_username(ProfileId.generate(), "no spaces")
        uow.profiles.get.assert_not_called()

    def test_profile_not_found(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            service.change_username(ProfileId.generate(), "bob_2")


# --- change_phone_number ---


class TestChangePhoneNumber:
    def test_replaces_number(
        self, service: ProfileService, uow: FakeUnitOfWork, publisher: MagicMock
    ):
        profile = _stored_profile()
        uow.profiles.get.return_value = profile

        result = service.change_phone_number(profile.id, "+359 87 765 4321", IsoCountry.BULGARIA)

        assert result.phone_number.value == "+359877654321"
        assert uow.committed
        events = _published(publisher)
        assert isinstance(events[0], ProfileFieldChanged)
        assert events[0].field is ProfileField.PHONE_NUMBER

    def test_same_number_does_not_commit(
        self, service: ProfileService, uow: FakeUnitOfWork, publisher: MagicMock
    ):
        profile = _stored_profile()
        uow.profiles.get.return_value = profile

        service.change_phone_number(profile.id, "00359888123456", IsoCountry.BULGARIA)

        assert profile.version == 2
        assert not uow.committed
        publisher.publish.assert_not_called()

    def test_invalid_number(self, service: ProfileService, uow: FakeUnitOfWork):
        with pytest.raises(InvalidPhoneNumberError):
            service.change_phone_number(ProfileId.generate(), "123", IsoCountry.BULGARIA)
        uow.profiles.get.assert_not_called()

    def test_unsupported_country(self, service: ProfileService):
        with pytest.raises(UnsupportedCountryError):
            service.change_phone_number(ProfileId.generate(), "+306912345678", IsoCountry.GREECE)


# --- change_names ---


class TestChangeNames:
    def test_updates_given_names_only(self, service: ProfileService, uow: FakeUnitOfWork):
        profile = _stored_profile()
        uow.profiles.get.return_value = profile

        result = service.change_names(profile.id, first_name="elena", middle_name="petrova")

        assert result.first_name == NameField("Elena")
        assert result.middle_name == NameField("Petrova")
        assert result.last_name == NameField("Ivanova")
        assert result.version == 4
        assert uow.committed

    def test_clears_middle_name(self, service: ProfileService, uow: FakeUnitOfWork):
        profile = _stored_profile()
        profile.update_middle_name(NameField("Petrova"))
        profile.drain_events()
        uow.profiles.get.return_value = profile

        service.change_names(profile.id, clear_middle_name=True)

        assert profile.middle_name is None
        assert uow.committed

    def test_nothing_to_change(
        self, service: ProfileService, uow: FakeUnitOfWork, publisher: MagicMock
    ):
        profile = _stored_profile()
        uow.profiles.get.return_value = profile

        service.change_names(profile.id, last_name="ivanova")

        assert not uow.committed
        uow.profiles.update.assert_not_called()
        publisher.publish.assert_not_called()

    def test_without_publisher(self, uow: FakeUnitOfWork, phone_specifications, file_inspector):
        service = ProfileService(lambda: uow, phone_specifications, file_inspector=file_inspector)
        profile = _stored_profile()
        uow.profiles.get.return_value = profile

        service.change_names(profile.id, first_name="Elena")

        assert not profile.has_pending_events
