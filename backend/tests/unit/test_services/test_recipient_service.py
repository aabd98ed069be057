"""Tests for the recipient service"""
import json

import pytest

from notify_core.domain.errors import ConfigurationError, InvalidInputError

from tests.conftest import CASE_ID

USERS_CONFIG = json.dumps({
    "stepManager": "step_request",
    "stepUser": "step_review",
    "memberShips": ["7$1", "step_request:approverGroup"],
})


def test_resolves_all_sources(recipient_service, membership_repo):
    result = recipient_service.resolve_recipient_ids(CASE_ID, USERS_CONFIG)

    # step_review user 4, manager of step_request user 3 is 2, memberships 7$1 and 4$2
    assert result == {2, 4, 5}
    assert membership_repo.calls == [["7$1", "4$2"]]


def test_steps_are_looked_up_within_the_case(recipient_service, step_repo):
    result = recipient_service.resolve_recipient_ids(2002, USERS_CONFIG)

    assert result == {4, 5}
    assert all(case_id == 2002 for case_id, _ in step_repo.calls)


def test_configuration_errors_propagate(recipient_service):
    with pytest.raises(ConfigurationError, match="MISSING"):
        recipient_service.resolve_recipient_ids(CASE_ID, '{"stepUser": "step_review", "memberShips": []}')

    with pytest.raises(InvalidInputError):
        recipient_service.resolve_recipient_ids(CASE_ID, "")


def test_action_document(recipient_service):
    action = json.dumps({
        "users": {"stepUser": "step_request", "memberShips": [], "membersShipsInput": "step_request:approverGroup"}
    })

    assert recipient_service.resolve_action_recipient_ids(CASE_ID, action) == {2, 3}


@pytest.mark.parametrize("action", [None, "", "{oops", '{"users": null}'])
def test_malformed_action_document_resolves_to_nobody(recipient_service, action):
    assert recipient_service.resolve_action_recipient_ids(CASE_ID, action) == set()


def test_recipient_emails_skip_users_without_address(recipient_service):
    emails = recipient_service.resolve_recipient_emails(CASE_ID, USERS_CONFIG)

    assert emails == ["helen.kelly@acme.example"]
