"""Template API Routes - Placeholder catalogue and template rendering"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_correlation_id_dep, get_notification_service
from ...domain.enums import DataResolverType
from ...engine.template_engine import find_tokens
from ...services.notification_service import NotificationService
from ...utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================

class ResolverKeyResponse(BaseModel):
    key: str
    category: str
    description: str


class ResolverKeyListResponse(BaseModel):
    items: List[ResolverKeyResponse]


class RenderTemplateRequest(BaseModel):
    """Template rendered for one recipient of a case"""
    template: str
    case_id: int = Field(..., gt=0)
    recipient_user_id: Optional[int] = None
    task_id: Optional[int] = None


class RenderTemplateResponse(BaseModel):
    rendered: str
    unresolved: List[str] = Field(default_factory=list, description="Tokens left in the rendered text")


class ParseTemplateRequest(BaseModel):
    template: str


class TokenResponse(BaseModel):
    raw: str
    ref_step: Optional[str]
    data_name: str


class ParseTemplateResponse(BaseModel):
    tokens: List[TokenResponse]


# ============================================================================
# Routes
# ============================================================================

@router.get("/keys", response_model=ResolverKeyListResponse)
async def list_resolver_keys():
    """Built-in placeholder names"""
    return ResolverKeyListResponse(items=[
        ResolverKeyResponse(
            key=resolver_type.key,
            category=resolver_type.category.value,
            description=resolver_type.description
        )
        for resolver_type in DataResolverType
    ])


@router.post("/render", response_model=RenderTemplateResponse)
async def render_template(
    request: RenderTemplateRequest,
    service: NotificationService = Depends(get_notification_service),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """Render a template for one recipient"""
    rendered = service.render_for_recipient(
        request.template,
        case_id=request.case_id,
        recipient_user_id=request.recipient_user_id,
        task_id=request.task_id
    ) or ""

    unresolved = [token.raw for token in find_tokens(rendered)]
    if unresolved:
        logger.info(f"Template rendered with {len(unresolved)} unresolved tokens", extra={"case_id": request.case_id})
    return RenderTemplateResponse(rendered=rendered, unresolved=unresolved)


@router.post("/parse", response_model=ParseTemplateResponse)
async def parse_template(request: ParseTemplateRequest):
    """List the placeholder tokens of a template"""
    return ParseTemplateResponse(tokens=[
        TokenResponse(raw=token.raw, ref_step=token.ref_step, data_name=token.data_name)
        for token in find_tokens(request.template)
    ])
