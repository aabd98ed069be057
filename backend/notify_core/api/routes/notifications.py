"""Notification API - Preview of notifications rendered for each recipient"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_correlation_id_dep, get_notification_service
from ...services.notification_service import NotificationService
from ...utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class PreviewNotificationsRequest(BaseModel):
    """Notification definition to render against a case"""
    case_id: int = Field(..., gt=0)
    users_config: str
    subject: str
    body: str
    task_id: Optional[int] = None


class NotificationResponse(BaseModel):
    """Single rendered notification"""
    notification_id: str
    recipient_user_id: int
    recipient_email: str
    subject: str
    body: str


class NotificationListResponse(BaseModel):
    items: List[NotificationResponse]
    total: int


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/preview", response_model=NotificationListResponse)
async def preview_notifications(
    request: PreviewNotificationsRequest,
    service: NotificationService = Depends(get_notification_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """Resolve recipients and render subject and body for each of them"""
    notifications = service.prepare_notifications(
        case_id=request.case_id,
        users_config_json=request.users_config,
        subject=request.subject,
        body=request.body,
        task_id=request.task_id
    )

    items = [NotificationResponse(**notification.model_dump()) for notification in notifications]
    return NotificationListResponse(items=items, total=len(items))
