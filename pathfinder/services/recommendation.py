import asyncio
import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from pathfinder.ai.gateway import RecommendationClient, InvalidRecommendationError
from pathfinder.db.crud.profiles import create_school_profile, create_college_profile
from pathfinder.db.crud.recommendations import create_recommendation
from pathfinder.db.models.profile import SchoolProfile, CollegeProfile
from pathfinder.db.models.recommendation import Recommendation
from pathfinder.db.models.user import User
from pathfinder.schemas.profile import SchoolProfileIn, CollegeProfileIn
from pathfinder.schemas.recommendation import ValidRecommendation, InvalidRecommendation, parse_recommendation
from pathfinder.services.gamification import grant_xp, award_badge, PROFILE_ASSESSMENT_XP

logger = logging.getLogger(__name__)

SKILL_CHAMPION_SKILLS = 10


async def recommend(kind: str, profile_data: Dict[str, Any], client: RecommendationClient) -> ValidRecommendation:
    """
    Requests and validates one recommendation without touching the database.
    Raises RecommendationError subclasses.
    """
    raw = await client.fetch(kind, profile_data)
    result = parse_recommendation(kind, raw)

    if isinstance(result, InvalidRecommendation):
        logger.error(f"Rejected {kind} recommendation: {result.reason}")
        raise InvalidRecommendationError(result.reason)
    return result


async def submit_school_profile(
    db: Session,
    user: User,
    payload: SchoolProfileIn,
    client: RecommendationClient,
) -> tuple[SchoolProfile, Recommendation]:
    # 1. Persist the profile first; it survives a failed AI call
    profile, prompt_data = await asyncio.to_thread(_create_profile_sync, db, "school", user.id, payload)

    # 2. Ask the gateway and validate (raises on failure, nothing else is written)
    result = await recommend("school", prompt_data, client)

    # 3. Store the validated recommendation and reward
    recommendation = await asyncio.to_thread(_store_school_result_sync, db, user, profile, result)
    return profile, recommendation


async def submit_college_profile(
    db: Session,
    user: User,
    payload: CollegeProfileIn,
    client: RecommendationClient,
) -> tuple[CollegeProfile, Recommendation]:
    profile, prompt_data = await asyncio.to_thread(_create_profile_sync, db, "college", user.id, payload)

    result = await recommend("college", prompt_data, client)

    recommendation = await asyncio.to_thread(_store_college_result_sync, db, user, profile, result)
    return profile, recommendation


# --- Synchronous DB steps, run in a worker thread ---

def _create_profile_sync(db: Session, kind: str, user_id: int, payload):
    create = create_school_profile if kind == "school" else create_college_profile
    profile = create(db, user_id, **payload.model_dump())
    return profile, profile.to_prompt_data()


def _store_school_result_sync(db: Session, user: User, profile: SchoolProfile, result: ValidRecommendation):
    recommendation = create_recommendation(db, profile.id, "school", result.to_json())
    profile.personality_type = result.data.personality_type
    db.commit()

    _reward_assessment(db, user)
    return recommendation


def _store_college_result_sync(db: Session, user: User, profile: CollegeProfile, result: ValidRecommendation):
    recommendation = create_recommendation(db, profile.id, "college", result.to_json())

    _reward_assessment(db, user)
    if len(profile.current_skills or []) >= SKILL_CHAMPION_SKILLS:
        award_badge(db, user.id, "skill-champion")
    return recommendation


def _reward_assessment(db: Session, user: User):
    grant_xp(db, user, "Completed profile assessment", PROFILE_ASSESSMENT_XP)
    if award_badge(db, user.id, "profile-pioneer"):
        logger.info(f"User {user.id} earned profile-pioneer")
