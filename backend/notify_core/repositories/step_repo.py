"""Step Instance Repository - Executed steps of a case and their stored input"""
from typing import Optional
from pymongo.collection import Collection
from pymongo import DESCENDING

from .mongo_client import STEP_INSTANCES_COLLECTION, get_collection
from ..domain.models import StepInstance
from ..utils.logger import get_logger

logger = get_logger(__name__)


class StepInstanceRepository:
    """Repository for step instance lookups"""

    def __init__(self, collection: Optional[Collection] = None):
        self._steps: Collection = collection if collection is not None else get_collection(STEP_INSTANCES_COLLECTION)

    def find_latest(self, case_id: int, step_ref: str) -> Optional[StepInstance]:
        """Most recent execution of step_ref within a case"""
        doc = self._steps.find_one(
            {"case_id": case_id, "step_ref": step_ref},
            sort=[("created_at", DESCENDING)]
        )
        if doc:
            doc.pop("_id", None)
            return StepInstance.model_validate(doc)
        logger.debug(f"No step instance for {step_ref} in case {case_id}", extra={"case_id": case_id, "step_ref": step_ref})
        return None

    def save(self, step: StepInstance) -> StepInstance:
        self._steps.insert_one(step.model_dump())
        logger.info(f"Saved step instance: {step.step_ref}", extra={"case_id": step.case_id, "step_ref": step.step_ref})
        return step
