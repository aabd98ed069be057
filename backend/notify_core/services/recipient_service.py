"""Recipient Service - Resolves the users configuration of a task against a case"""
from typing import List, Optional, Set

from ..domain.models import InvolvedUsersConfig, StepInstance
from ..engine.config_parser import parse_users_config
from ..engine.reference_resolver import collect_all_recipient_ids, parse_and_collect_recipient_ids
from ..repositories.step_repo import StepInstanceRepository
from ..repositories.membership_repo import MembershipRepository
from ..repositories.user_repo import UserRepository
from .directory_service import DirectoryService
from ..utils.logger import get_logger

logger = get_logger(__name__)


class RecipientService:
    """
    Binds the reference resolver to the stores of one deployment

    Step references are looked up within the case being notified about;
    the latest execution of a step wins.
    """

    def __init__(
        self,
        step_repo: Optional[StepInstanceRepository] = None,
        membership_repo: Optional[MembershipRepository] = None,
        directory_service: Optional[DirectoryService] = None
    ):
        self.step_repo = step_repo if step_repo is not None else StepInstanceRepository()
        self.membership_repo = (
            membership_repo if membership_repo is not None else MembershipRepository(user_repo=UserRepository())
        )
        self.directory_service = directory_service if directory_service is not None else DirectoryService()

    def resolve_recipient_ids(self, case_id: int, users_config_json: Optional[str]) -> Set[int]:
        """
        Recipient user ids of a users configuration document

        Raises:
            ValidationError: If the configuration document is misauthored
        """
        logger.info(f"Resolving recipients for case {case_id}", extra={"case_id": case_id})
        return parse_and_collect_recipient_ids(
            users_config_json,
            step_lookup=self._step_lookup(case_id),
            id_extractor=_step_user_id,
            bulk_lookup=self.membership_repo.find_user_ids_by_keys,
            manager_lookup=self.directory_service.get_manager_id,
            step_field_extractor=_step_json_input,
        )

    def resolve_action_recipient_ids(self, case_id: int, action_json: Optional[str]) -> Set[int]:
        """Recipient user ids of the "users" node of an action document, never raising"""
        config = parse_users_config(action_json)
        return self.collect(case_id, config)

    def collect(self, case_id: int, config: InvolvedUsersConfig) -> Set[int]:
        return collect_all_recipient_ids(
            config,
            step_lookup=self._step_lookup(case_id),
            id_extractor=_step_user_id,
            bulk_lookup=self.membership_repo.find_user_ids_by_keys,
            manager_lookup=self.directory_service.get_manager_id,
            step_field_extractor=_step_json_input,
        )

    def resolve_recipient_emails(self, case_id: int, users_config_json: Optional[str]) -> List[str]:
        """E-mail addresses of the resolved recipients, ordered by user id"""
        user_ids = sorted(self.resolve_recipient_ids(case_id, users_config_json))
        return self.directory_service.get_emails_by_user_ids(user_ids)

    def _step_lookup(self, case_id: int):
        def lookup(step_ref: str) -> Optional[StepInstance]:
            return self.step_repo.find_latest(case_id, step_ref)
        return lookup


def _step_user_id(step: StepInstance) -> Optional[int]:
    return step.user_id


def _step_json_input(step: StepInstance) -> Optional[str]:
    return step.json_input
