"""
Pytest Configuration and Fixtures

Shared sample data: a small directory with a reporting line, group/role
memberships and one case with two executed steps.
"""
import json

import pytest

from notify_core.domain.models import DirectoryUser, StepInstance
from notify_core.services.directory_service import DirectoryService
from notify_core.services.recipient_service import RecipientService
from notify_core.services.notification_service import NotificationService

from tests.fakes import FakeMembershipRepository, FakeStepRepository, FakeUserRepository

CASE_ID = 1001


@pytest.fixture
def directory_users():
    return [
        DirectoryUser(user_id=1, user_name="walter.bates", first_name="Walter", last_name="Bates",
                      email="walter.bates@acme.example"),
        DirectoryUser(user_id=2, user_name="helen.kelly", first_name="Helen", last_name="Kelly",
                      email="helen.kelly@acme.example", manager_user_id=1),
        DirectoryUser(user_id=3, user_name="april.sanchez", first_name="April", last_name="Sanchez",
                      email="april.sanchez@acme.example", manager_user_id=2),
        DirectoryUser(user_id=4, user_name="jan.fisher", first_name="Jan", email=None, manager_user_id=2),
    ]


@pytest.fixture
def step_instances():
    return [
        StepInstance(
            case_id=CASE_ID,
            step_ref="step_request",
            user_id=3,
            username="april.sanchez",
            status="completed",
            json_input=json.dumps({"approverGroup": "4$2"}),
        ),
        StepInstance(
            case_id=CASE_ID,
            step_ref="step_review",
            user_id=4,
            username="jan.fisher",
            status="pending",
            json_input="{}",
        ),
    ]


@pytest.fixture
def user_repo(directory_users):
    return FakeUserRepository(directory_users)


@pytest.fixture
def step_repo(step_instances):
    return FakeStepRepository(step_instances)


@pytest.fixture
def membership_repo():
    return FakeMembershipRepository({"4$2": [2], "7$1": [4, 5]})


@pytest.fixture
def directory_service(user_repo):
    return DirectoryService(user_repo=user_repo)


@pytest.fixture
def recipient_service(step_repo, membership_repo, directory_service):
    return RecipientService(
        step_repo=step_repo,
        membership_repo=membership_repo,
        directory_service=directory_service
    )


@pytest.fixture
def notification_service(directory_service, step_repo, recipient_service):
    return NotificationService(
        directory_service=directory_service,
        step_repo=step_repo,
        recipient_service=recipient_service
    )
