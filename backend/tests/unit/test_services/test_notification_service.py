"""Tests for the notification service"""
import json

from notify_core.config.settings import settings

from tests.conftest import CASE_ID

TEMPLATE = (
    "Hi {{recipient_firstname}}, {{step_review:step_user_name}} is "
    "{{step_review:step_status}}. {{task_link}}"
)


def test_render_for_recipient(notification_service):
    rendered = notification_service.render_for_recipient(TEMPLATE, CASE_ID, 3, task_id=55)

    host = settings.host_url.rstrip("/")
    assert rendered == (
        f'Hi April, jan.fisher is pending. '
        f'<a href="{host}{settings.task_link_path}?taskId=55">#55</a>'
    )


def test_task_link_uses_configured_path(notification_service, monkeypatch):
    monkeypatch.setattr(settings, "task_link_path", "/portal/tasks")

    rendered = notification_service.render_for_recipient("{{task_url}}", CASE_ID, 3, task_id=55)

    assert rendered == f"{settings.host_url.rstrip('/')}/portal/tasks?taskId=55"


def test_unresolved_tokens_left_in_place(notification_service):
    rendered = notification_service.render_for_recipient(
        "{{step_missing:step_status}} {{step_review:invoice}}", CASE_ID, 3
    )

    assert rendered == "{{step_missing:step_status}} {{step_review:invoice}}"


def test_unknown_recipient_keeps_recipient_tokens(notification_service):
    rendered = notification_service.render_for_recipient("Dear {{recipient_firstname}}", CASE_ID, 99)

    assert rendered == "Dear {{recipient_firstname}}"


def test_fallback_resolver_supplies_custom_names(notification_service):
    resolver = notification_service.build_resolver(
        CASE_ID, 3, fallback_resolver=lambda ref_step, data_name: "1200" if data_name == "amount" else None
    )

    assert resolver("step_request", "amount") == "1200"
    assert resolver("step_review", "step_status") == "pending"


def test_prepare_notifications(notification_service):
    users_config = json.dumps({
        "stepManager": "step_request",
        "stepUser": "step_review",
        "memberShips": ["7$1"],
    })

    notifications = notification_service.prepare_notifications(
        CASE_ID,
        users_config,
        subject="Task for {{recipient_fullname}}",
        body="Please review {{task_link}}",
        task_id=None,
    )

    # 4 has no address and 5 is not in the directory
    assert [n.recipient_user_id for n in notifications] == [2]
    notification = notifications[0]
    assert notification.recipient_email == "helen.kelly@acme.example"
    assert notification.subject == "Task for Helen Kelly"
    assert notification.body == "Please review #invalid-task"
    assert notification.notification_id.startswith("NTF-")
