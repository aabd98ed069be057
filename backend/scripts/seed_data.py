"""
Seed Data Script - Creates a sample directory, memberships and case for testing
Run: python -m scripts.seed_data
"""
import json
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime, timedelta, timezone
from notify_core.repositories.mongo_client import create_indexes
from notify_core.repositories.user_repo import UserRepository
from notify_core.repositories.membership_repo import MembershipRepository
from notify_core.repositories.step_repo import StepInstanceRepository
from notify_core.domain.models import DirectoryUser, StepInstance

SAMPLE_CASE_ID = 1001

# Group and role ids of the sample organisation
GROUP_FINANCE = 4
GROUP_IT = 7
ROLE_MEMBER = 1
ROLE_APPROVER = 2


def create_sample_directory() -> None:
    """Users with a simple reporting line: walter <- helen <- april, jan"""
    user_repo = UserRepository()
    users = [
        DirectoryUser(user_id=1, user_name="walter.bates", first_name="Walter", last_name="Bates",
                      email="walter.bates@acme.example"),
        DirectoryUser(user_id=2, user_name="helen.kelly", first_name="Helen", last_name="Kelly",
                      email="helen.kelly@acme.example", manager_user_id=1),
        DirectoryUser(user_id=3, user_name="april.sanchez", first_name="April", last_name="Sanchez",
                      email="april.sanchez@acme.example", manager_user_id=2),
        DirectoryUser(user_id=4, user_name="jan.fisher", first_name="Jan", last_name="Fisher",
                      email="jan.fisher@acme.example", manager_user_id=2),
        DirectoryUser(user_id=5, user_name="former.employee", first_name="Former", last_name="Employee",
                      email="former@acme.example", enabled=False),
    ]
    for user in users:
        user_repo.save(user)
    print(f"Created {len(users)} directory users")

    membership_repo = MembershipRepository(user_repo=user_repo)
    membership_repo.add_membership(2, GROUP_FINANCE, ROLE_APPROVER)
    membership_repo.add_membership(3, GROUP_FINANCE, ROLE_MEMBER)
    membership_repo.add_membership(4, GROUP_IT, ROLE_MEMBER)
    membership_repo.add_membership(5, GROUP_IT, ROLE_MEMBER)
    print("Created memberships")


def create_sample_case() -> None:
    """A purchase request case with a submission step and a review step"""
    step_repo = StepInstanceRepository()
    now = datetime.now(timezone.utc)

    step_repo.save(StepInstance(
        case_id=SAMPLE_CASE_ID,
        step_ref="step_request",
        user_id=3,
        username="april.sanchez",
        status="completed",
        json_input=json.dumps({"amount": 1200, "approverGroup": f"{GROUP_FINANCE}${ROLE_APPROVER}"}),
        created_at=now - timedelta(hours=2),
    ))
    step_repo.save(StepInstance(
        case_id=SAMPLE_CASE_ID,
        step_ref="step_review",
        user_id=4,
        username="jan.fisher",
        status="pending",
        json_input=json.dumps({"comment": "Needs budget owner sign-off"}),
        created_at=now - timedelta(hours=1),
    ))
    print(f"Created case {SAMPLE_CASE_ID} with 2 step instances")

    example = {
        "stepManager": "step_request",
        "stepUser": "step_review",
        "memberShips": [f"{GROUP_IT}${ROLE_MEMBER}", "step_request:approverGroup"],
    }
    print(f"Try users_config: {json.dumps(example)}")


def main():
    print("=== Seeding database ===")
    print("-" * 40)

    create_indexes()
    create_sample_directory()
    create_sample_case()

    print("-" * 40)
    print("Done!")


if __name__ == "__main__":
    main()
