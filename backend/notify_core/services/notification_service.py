"""Notification Service - Renders notification templates for each recipient"""
from typing import List, Optional

from ..domain.models import RenderedNotification
from ..engine.collaborators import PlaceholderResolverFn
from ..engine.placeholder_resolver import compose_resolvers, create_resolver, create_step_data_resolver
from ..engine.template_engine import substitute_template
from ..repositories.step_repo import StepInstanceRepository
from .directory_service import DirectoryService
from .recipient_service import RecipientService
from ..config.settings import settings
from ..utils.idgen import generate_notification_id
from ..utils.logger import get_logger

logger = get_logger(__name__)


class NotificationService:
    """Service for rendering notifications"""

    def __init__(
        self,
        directory_service: Optional[DirectoryService] = None,
        step_repo: Optional[StepInstanceRepository] = None,
        recipient_service: Optional[RecipientService] = None
    ):
        self.directory_service = directory_service if directory_service is not None else DirectoryService()
        self.step_repo = step_repo if step_repo is not None else StepInstanceRepository()
        self.recipient_service = recipient_service if recipient_service is not None else RecipientService(
            step_repo=self.step_repo,
            directory_service=self.directory_service
        )

    # =========================================================================
    # Rendering
    # =========================================================================

    def build_resolver(
        self,
        case_id: int,
        recipient_user_id: Optional[int],
        task_id: Optional[int] = None,
        fallback_resolver: Optional[PlaceholderResolverFn] = None
    ) -> PlaceholderResolverFn:
        """
        Resolver for one recipient of a case

        Recipient and task names are built in; step_user_name and
        step_status read the latest execution of the referenced step.
        """
        step_data_resolver = create_step_data_resolver(
            lambda step_ref: self.step_repo.find_latest(case_id, step_ref),
            lambda step: step.username,
            lambda step: step.status,
        )
        return create_resolver(
            self.directory_service,
            recipient_user_id,
            settings.host_url,
            task_id,
            compose_resolvers(step_data_resolver, fallback_resolver),
            task_link_path=settings.task_link_path,
        )

    def render_for_recipient(
        self,
        template: Optional[str],
        case_id: int,
        recipient_user_id: Optional[int],
        task_id: Optional[int] = None
    ) -> Optional[str]:
        resolver = self.build_resolver(case_id, recipient_user_id, task_id)
        return substitute_template(template, resolver)

    def prepare_notifications(
        self,
        case_id: int,
        users_config_json: Optional[str],
        subject: str,
        body: str,
        task_id: Optional[int] = None
    ) -> List[RenderedNotification]:
        """
        Resolve recipients and render subject and body for each of them

        Recipients without an e-mail address are skipped.

        Raises:
            ValidationError: If the users configuration is misauthored
        """
        recipient_ids = sorted(self.recipient_service.resolve_recipient_ids(case_id, users_config_json))

        notifications: List[RenderedNotification] = []
        for user_id in recipient_ids:
            email = self.directory_service.get_email_by_user_id(user_id)
            if not email:
                logger.warning(
                    f"Skipping recipient {user_id}: no e-mail address",
                    extra={"case_id": case_id, "user_id": user_id}
                )
                continue

            resolver = self.build_resolver(case_id, user_id, task_id)
            notifications.append(RenderedNotification(
                notification_id=generate_notification_id(),
                recipient_user_id=user_id,
                recipient_email=email,
                subject=substitute_template(subject, resolver) or "",
                body=substitute_template(body, resolver) or "",
            ))

        logger.info(
            f"Prepared {len(notifications)} notifications for {len(recipient_ids)} recipients",
            extra={"case_id": case_id, "task_id": task_id}
        )
        return notifications
