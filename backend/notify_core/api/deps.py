"""API Dependencies - Common dependencies for routes"""
from typing import Optional
from fastapi import Header

from ..services.directory_service import DirectoryService
from ..services.recipient_service import RecipientService
from ..services.notification_service import NotificationService
from ..utils.logger import set_correlation_id
from ..utils.idgen import generate_correlation_id


async def get_correlation_id_dep(
    x_correlation_id: Optional[str] = Header(None, alias="X-Correlation-Id")
) -> str:
    """
    Get or generate correlation ID for request tracing

    If client provides X-Correlation-Id, use it.
    Otherwise generate a new one.
    """
    correlation_id = x_correlation_id or generate_correlation_id()
    set_correlation_id(correlation_id)
    return correlation_id


# Services are built per request; tests replace these through
# app.dependency_overrides.
def get_directory_service() -> DirectoryService:
    return DirectoryService()


def get_recipient_service() -> RecipientService:
    return RecipientService()


def get_notification_service() -> NotificationService:
    return NotificationService()
