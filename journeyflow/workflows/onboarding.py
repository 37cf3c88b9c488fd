"""
Onboarding Journey Implementation.

The sample journey demonstrating the engine capabilities:
1. Init - welcome the user (checkpoint)
2. Profile - collect name and email (checkpoint)
3. Verify - reached internally from Profile in the same call, shows a review
4. Done - confirmation, ends the journey

Profile and Verify can go back to the previous state; the profile form can
be resubmitted from Profile.
"""

from typing import Any, Dict, Optional
import logging
import re

from pydantic import BaseModel

from journeyflow.config import settings
from journeyflow.engine.executor import Executor
from journeyflow.engine.graph import Graph
from journeyflow.engine.handler import RevisitResult, VisitResult
from journeyflow.engine.locks import JourneyLocks
from journeyflow.engine.state import BACK_EVENT, TRANSITION_COMPLETE, State, Transition
from journeyflow.errors import BadRequestError
from journeyflow.storage.journey_store import KeyValueJourneyStore
from journeyflow.storage.memory import InMemoryKeyValueStore


logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

NEXT_EVENT = "Next"
VERIFY_EVENT = "INTERNAL_Verify"
CONFIRM_EVENT = "Confirm"


class OnboardingData(BaseModel):
    """Journey data carried between onboarding states."""
    started: bool = False
    name: Optional[str] = None
    email: Optional[str] = None
    verified: bool = False
    completed: bool = False


# ============================================================
# State Handlers
# ============================================================

class WelcomeHandler:
    """Greets the user; nothing to collect yet."""
    
    def visit(self, jid: str, journey_data: OnboardingData, data: Any) -> VisitResult:
        updated = journey_data.model_copy(update={"started": True})
        return VisitResult({"message": "Welcome! Tell us about yourself."}, updated, TRANSITION_COMPLETE)
    
    def revisit(self, jid: str, journey_data: OnboardingData) -> RevisitResult:
        return RevisitResult({"message": "Welcome back!"}, journey_data)


class ProfileHandler:
    """
    Validates and stores the user's profile.
    
    Input data requires:
    - name: str
    - email: str
    
    Hands the profile to the Verify state with an internal event.
    """
    
    def visit(self, jid: str, journey_data: OnboardingData, data: Any) -> VisitResult:
        data = data or {}
        if not isinstance(data, dict):
            raise BadRequestError("profile data must be an object")
        name = str(data.get("name") or "").strip()
        email = str(data.get("email") or "").strip()
        if not name:
            raise BadRequestError("name is required")
        if not EMAIL_PATTERN.match(email):
            raise BadRequestError(f"invalid email: {email!r}")
        
        updated = journey_data.model_copy(update={"name": name, "email": email, "verified": False})
        logger.info(f"Journey {jid}: profile captured")
        return VisitResult({"name": name, "email": email}, updated, VERIFY_EVENT)
    
    def revisit(self, jid: str, journey_data: OnboardingData) -> RevisitResult:
        # Pre-fill the form with what we already have
        return RevisitResult(
            {"name": journey_data.name, "email": journey_data.email},
            journey_data,
        )


class VerifyHandler:
    """Builds the review screen for the profile passed in by Profile."""
    
    async def visit(self, jid: str, journey_data: OnboardingData, data: Any) -> VisitResult:
        updated = journey_data.model_copy(update={"verified": True})
        return VisitResult(self._review(updated), updated, TRANSITION_COMPLETE)
    
    async def revisit(self, jid: str, journey_data: OnboardingData) -> RevisitResult:
        return RevisitResult(self._review(journey_data), journey_data)
    
    @staticmethod
    def _review(journey_data: OnboardingData) -> Dict[str, Any]:
        return {
            "name": journey_data.name,
            "email": journey_data.email,
            "verified": journey_data.verified,
        }


class DoneHandler:
    def visit(self, jid: str, journey_data: OnboardingData, data: Any) -> VisitResult:
        updated = journey_data.model_copy(update={"completed": True})
        logger.info(f"Journey {jid}: onboarding complete")
        return VisitResult({"message": f"All set, {journey_data.name}!"}, updated, TRANSITION_COMPLETE)
    
    def revisit(self, jid: str, journey_data: OnboardingData) -> RevisitResult:
        return RevisitResult({"message": "You are already onboarded."}, journey_data)


# ============================================================
# Graph Construction
# ============================================================

def create_onboarding_graph(strict: bool = False) -> Graph:
    """Create the onboarding journey graph."""
    init = State(
        name="Init",
        handler=WelcomeHandler(),
        transitions=[Transition(NEXT_EVENT, "Profile")],
        is_checkpoint=True,
        next_screen="WELCOME",
    )
    others = [
        State(
            name="Profile",
            handler=ProfileHandler(),
            transitions=[
                Transition(VERIFY_EVENT, "Verify"),
                Transition(NEXT_EVENT, "Profile"),  # resubmit after going back
                Transition(BACK_EVENT, "Init"),
            ],
            is_checkpoint=True,
            next_screen="PROFILE_FORM",
            meta_data={"fields": ["name", "email"]},
        ),
        State(
            name="Verify",
            handler=VerifyHandler(),
            transitions=[
                Transition(CONFIRM_EVENT, "Done"),
                Transition(BACK_EVENT, "Profile"),
            ],
            next_screen="REVIEW",
        ),
        State(
            name="Done",
            handler=DoneHandler(),
            next_screen="COMPLETE",
        ),
    ]
    return Graph.build(init, others, strict=strict)


def create_onboarding_executor(kv_store: Optional[InMemoryKeyValueStore] = None) -> Executor[OnboardingData]:
    """
    Create an executor for the onboarding journey.
    
    Args:
        kv_store: Key-value store for journey records (in-memory if omitted)
        
    Returns:
        A ready-to-use Executor
    """
    kv_store = kv_store or InMemoryKeyValueStore(expiry_minutes=settings.JOURNEY_EXPIRY_MINUTES)
    journey_store = KeyValueJourneyStore(
        kv_store,
        data_type=OnboardingData,
        key_prefix=settings.JOURNEY_KEY_PREFIX,
    )
    return Executor(
        create_onboarding_graph(strict=settings.STRICT_GRAPH),
        journey_store,
        locks=JourneyLocks() if settings.SERIALIZE_JOURNEYS else None,
        max_hops=settings.MAX_HOPS,
    )
