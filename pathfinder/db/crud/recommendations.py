from sqlalchemy import or_, and_, select
from sqlalchemy.orm import Session
from pathfinder.db.models.recommendation import Recommendation
from pathfinder.db.models.profile import SchoolProfile, CollegeProfile


def create_recommendation(db: Session, profile_id: int, profile_type: str, data: dict) -> Recommendation:
    recommendation = Recommendation(
        profile_id=profile_id,
        profile_type=profile_type,
        recommendation_data=data,
    )
    db.add(recommendation)
    db.commit()
    db.refresh(recommendation)
    return recommendation


def get_latest_recommendation(db: Session, profile_id: int, profile_type: str) -> Recommendation | None:
    return (
        db.query(Recommendation)
        .filter(
            Recommendation.profile_id == profile_id,
            Recommendation.profile_type == profile_type,
        )
        .order_by(Recommendation.created_at.desc(), Recommendation.id.desc())
        .first()
    )


def list_recent_for_user(db: Session, user_id: int, limit: int = 5) -> list[Recommendation]:
    school_ids = select(SchoolProfile.id).where(SchoolProfile.user_id == user_id)
    college_ids = select(CollegeProfile.id).where(CollegeProfile.user_id == user_id)

    return (
        db.query(Recommendation)
        .filter(or_(
            and_(Recommendation.profile_type == "school", Recommendation.profile_id.in_(school_ids)),
            and_(Recommendation.profile_type == "college", Recommendation.profile_id.in_(college_ids)),
        ))
        .order_by(Recommendation.created_at.desc(), Recommendation.id.desc())
        .limit(limit)
        .all()
    )
