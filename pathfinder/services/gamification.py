from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from pathfinder.db.models.gamification import Badge, UserBadge, ActivityLog, QuizAttempt
from pathfinder.db.models.user import User

XP_PER_LEVEL = 1000
ON_FIRE_STREAK = 7

PROFILE_ASSESSMENT_XP = 100

BADGE_DEFINITIONS = [
    {"slug": "profile-pioneer", "name": "Profile Pioneer", "desc": "Complete your first profile", "icon": "star", "color": "primary"},
    {"slug": "quick-learner", "name": "Quick Learner", "desc": "Complete 5 quizzes", "icon": "zap", "color": "secondary"},
    {"slug": "quiz-master", "name": "Quiz Master", "desc": "Score 80%+ in 3 quizzes", "icon": "trophy", "color": "accent"},
    {"slug": "skill-champion", "name": "Skill Champion", "desc": "List 10 skills on your college profile", "icon": "award", "color": "warning"},
    {"slug": "consistency-king", "name": "Consistency King", "desc": "30-day activity streak", "icon": "flame", "color": "warning"},
]


@dataclass(frozen=True)
class LevelProgress:
    level: int
    current_xp: int   # XP earned inside the current level
    level_xp: int     # XP needed to complete a level
    total_xp: int

    @property
    def percent(self) -> int:
        return round(self.current_xp / self.level_xp * 100)

    @property
    def xp_to_next_level(self) -> int:
        return self.level_xp - self.current_xp


def level_progress(total_xp: int) -> LevelProgress:
    total_xp = max(0, total_xp or 0)
    return LevelProgress(
        level=total_xp // XP_PER_LEVEL + 1,
        current_xp=total_xp % XP_PER_LEVEL,
        level_xp=XP_PER_LEVEL,
        total_xp=total_xp,
    )


def is_on_fire(streak: int) -> bool:
    return streak >= ON_FIRE_STREAK


def init_badges(db: Session):
    """Ensures all badges exist in DB."""
    # Fetch all existing badge slugs in a single query to avoid N+1.
    existing_slugs = {slug for slug, in db.query(Badge.slug).all()}

    for b_def in BADGE_DEFINITIONS:
        if b_def["slug"] not in existing_slugs:
            db.add(Badge(
                slug=b_def["slug"],
                name=b_def["name"],
                description=b_def["desc"],
                icon=b_def["icon"],
                color=b_def["color"],
            ))
    db.commit()


def award_badge(db: Session, user_id: int, badge_slug: str) -> bool:
    """Awards a badge to a user if they don't have it yet. Returns True if awarded."""
    badge = db.query(Badge).filter(Badge.slug == badge_slug).first()
    if not badge:
        return False

    has_badge = db.query(UserBadge).filter(
        UserBadge.user_id == user_id,
        UserBadge.badge_id == badge.id
    ).first()

    if has_badge:
        return False

    db.add(UserBadge(user_id=user_id, badge_id=badge.id))
    db.commit()
    return True


def record_activity(db: Session, user: User, today: Optional[date] = None) -> int:
    """
    Updates the daily streak for an action performed today and returns it.
    Same day: unchanged. Next day: +1. Any gap: back to 1.
    """
    today = today or date.today()
    last = user.last_active_date

    if last == today:
        return user.streak_count
    if last is not None and (today - last).days == 1:
        user.streak_count = (user.streak_count or 0) + 1
    else:
        user.streak_count = 1

    user.last_active_date = today
    user.max_streak = max(user.max_streak or 0, user.streak_count)
    db.commit()

    if user.streak_count >= 30:
        award_badge(db, user.id, "consistency-king")
    return user.streak_count


def grant_xp(db: Session, user: User, action: str, xp: int, today: Optional[date] = None) -> ActivityLog:
    """Adds XP, logs the activity, and counts the day towards the streak."""
    user.xp_points = (user.xp_points or 0) + xp
    entry = ActivityLog(user_id=user.id, action=action, xp=xp)
    db.add(entry)
    db.commit()
    record_activity(db, user, today=today)
    return entry


def recent_activity(db: Session, user_id: int, limit: int = 5) -> list[ActivityLog]:
    return (
        db.query(ActivityLog)
        .filter(ActivityLog.user_id == user_id)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
        .limit(limit)
        .all()
    )


def check_quiz_badges(db: Session, user_id: int, unscored_quiz_ids=()) -> list[str]:
    """
    Re-evaluates quiz-driven badges after an attempt. Returns newly awarded slugs.
    Attempts of unscored_quiz_ids count as completions but not towards Quiz Master.
    """
    awarded = []
    attempts = db.query(QuizAttempt).filter(QuizAttempt.user_id == user_id)
    scored = attempts.filter(QuizAttempt.quiz_id.notin_(list(unscored_quiz_ids)))

    if attempts.count() >= 5 and award_badge(db, user_id, "quick-learner"):
        awarded.append("quick-learner")
    if scored.filter(QuizAttempt.percentage >= 80).count() >= 3 and award_badge(db, user_id, "quiz-master"):
        awarded.append("quiz-master")
    return awarded


def badge_board(db: Session, user: User) -> list[dict]:
    """Every badge with an `earned` flag, in definition order, for the badge grid."""
    earned_ids = {ub.badge_id for ub in db.query(UserBadge).filter(UserBadge.user_id == user.id)}
    order = {b["slug"]: i for i, b in enumerate(BADGE_DEFINITIONS)}
    badges = sorted(db.query(Badge).all(), key=lambda b: order.get(b.slug, len(order)))
    return [
        {
            "slug": b.slug,
            "name": b.name,
            "description": b.description,
            "icon": b.icon,
            "color": b.color,
            "earned": b.id in earned_ids,
        }
        for b in badges
    ]
