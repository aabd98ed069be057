"""Tests for the directory service"""
import pytest

from notify_core.domain.enums import UserAttribute
from notify_core.domain.models import DirectoryUser
from notify_core.services.directory_service import DirectoryService

from tests.fakes import FakeUserRepository


class TestGetAttribute:

    @pytest.mark.parametrize("attribute,expected", [
        (UserAttribute.FIRST_NAME, "April"),
        (UserAttribute.LAST_NAME, "Sanchez"),
        (UserAttribute.FULL_NAME, "April Sanchez"),
        (UserAttribute.EMAIL, "april.sanchez@acme.example"),
        (UserAttribute.USER_NAME, "april.sanchez"),
    ])
    def test_attributes(self, directory_service, attribute, expected):
        assert directory_service.get_attribute(3, attribute) == expected

    def test_full_name_with_first_name_only(self, directory_service):
        assert directory_service.get_attribute(4, UserAttribute.FULL_NAME) == "Jan"

    def test_full_name_falls_back_to_user_name(self):
        service = DirectoryService(user_repo=FakeUserRepository([DirectoryUser(user_id=8, user_name="svc.robot")]))

        assert service.get_attribute(8, UserAttribute.FULL_NAME) == "svc.robot"

    def test_missing_email(self, directory_service):
        assert directory_service.get_attribute(4, UserAttribute.EMAIL) is None

    def test_unknown_user_does_not_raise(self, directory_service):
        assert directory_service.get_attribute(99, UserAttribute.FIRST_NAME) is None


class TestManagers:

    def test_manager_id(self, directory_service):
        assert directory_service.get_manager_id(3) == 2

    @pytest.mark.parametrize("user_id", [1, 99])
    def test_no_manager(self, directory_service, user_id):
        assert directory_service.get_manager_id(user_id) is None

    def test_manager_email(self, directory_service):
        assert directory_service.get_manager_email_by_user_id(3) == "helen.kelly@acme.example"
        assert directory_service.get_manager_email_by_user_id(1) is None


class TestEmails:

    @pytest.mark.parametrize("user_id", [0, -1, None])
    def test_invalid_user_id(self, directory_service, user_id):
        assert directory_service.get_email_by_user_id(user_id) is None

    def test_emails_by_user_ids(self, directory_service):
        emails = directory_service.get_emails_by_user_ids([3, 2, 3, 4, 0, 99])

        assert emails == ["april.sanchez@acme.example", "helen.kelly@acme.example"]

    def test_emails_of_nobody(self, directory_service):
        assert directory_service.get_emails_by_user_ids(None) == []
        assert directory_service.get_emails_by_user_ids([]) == []
