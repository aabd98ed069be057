"""Recipient API Routes - Users configuration validation and resolution"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_correlation_id_dep, get_recipient_service
from ...engine.config_parser import validate_involved_users
from ...services.recipient_service import RecipientService
from ...utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================

class ResolveRecipientsRequest(BaseModel):
    """Users configuration to resolve within a case"""
    case_id: int = Field(..., gt=0)
    users_config: str = Field(..., description="JSON with stepManager, stepUser and memberShips")


class ResolveActionRecipientsRequest(BaseModel):
    """Action document whose "users" node is resolved within a case"""
    case_id: int = Field(..., gt=0)
    action: str


class ValidateConfigRequest(BaseModel):
    users_config: str


class RecipientsResponse(BaseModel):
    case_id: int
    recipient_ids: List[int]
    total: int


class UsersConfigResponse(BaseModel):
    """Parsed users configuration"""
    step_manager_ref: Optional[str]
    step_user_ref: Optional[str]
    memberships: List[str]


# ============================================================================
# Routes
# ============================================================================

@router.post("/resolve", response_model=RecipientsResponse)
async def resolve_recipients(
    request: ResolveRecipientsRequest,
    service: RecipientService = Depends(get_recipient_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """Resolve a users configuration to recipient user ids"""
    recipient_ids = sorted(service.resolve_recipient_ids(request.case_id, request.users_config))

    logger.info(f"Resolved {len(recipient_ids)} recipients", extra={"case_id": request.case_id})
    return RecipientsResponse(case_id=request.case_id, recipient_ids=recipient_ids, total=len(recipient_ids))


@router.post("/resolve-action", response_model=RecipientsResponse)
async def resolve_action_recipients(
    request: ResolveActionRecipientsRequest,
    service: RecipientService = Depends(get_recipient_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """Resolve the users node of an action document; malformed documents resolve to nobody"""
    recipient_ids = sorted(service.resolve_action_recipient_ids(request.case_id, request.action))
    return RecipientsResponse(case_id=request.case_id, recipient_ids=recipient_ids, total=len(recipient_ids))


@router.post("/validate", response_model=UsersConfigResponse)
async def validate_users_config(
    request: ValidateConfigRequest,
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """Strictly validate a users configuration as authored in a task definition"""
    config = validate_involved_users(request.users_config)
    return UsersConfigResponse(
        step_manager_ref=config.step_manager_ref,
        step_user_ref=config.step_user_ref,
        memberships=list(config.memberships)
    )
