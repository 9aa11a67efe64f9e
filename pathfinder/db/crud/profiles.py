from typing import Optional
from sqlalchemy.orm import Session
from pathfinder.db.models.profile import SchoolProfile, CollegeProfile

PROFILE_MODELS = {
    "school": SchoolProfile,
    "college": CollegeProfile,
}


def create_school_profile(db: Session, user_id: int, **fields) -> SchoolProfile:
    profile = SchoolProfile(user_id=user_id, **fields)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def create_college_profile(db: Session, user_id: int, **fields) -> CollegeProfile:
    profile = CollegeProfile(user_id=user_id, **fields)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def get_owned_profile(db: Session, kind: str, profile_id: int, user_id: int):
    """Returns the profile only when it belongs to user_id."""
    model = PROFILE_MODELS[kind]
    return (
        db.query(model)
        .filter(model.id == profile_id, model.user_id == user_id)
        .first()
    )


def get_latest_profile(db: Session, kind: str, user_id: int) -> Optional[SchoolProfile | CollegeProfile]:
    model = PROFILE_MODELS[kind]
    return (
        db.query(model)
        .filter(model.user_id == user_id)
        .order_by(model.created_at.desc(), model.id.desc())
        .first()
    )
