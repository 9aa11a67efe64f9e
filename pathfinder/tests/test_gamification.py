from datetime import date, timedelta

from pathfinder.db.models.gamification import ActivityLog, Badge
from pathfinder.services.gamification import (
    level_progress, is_on_fire, record_activity, grant_xp, award_badge,
    badge_board, recent_activity, init_badges, BADGE_DEFINITIONS,
)
from pathfinder.tests.conftest import has_badge

TODAY = date(2026, 3, 10)


def test_level_progress():
    progress = level_progress(2350)
    assert progress.level == 3
    assert progress.current_xp == 350
    assert progress.percent == 35
    assert progress.xp_to_next_level == 650

    assert level_progress(0).level == 1
    assert level_progress(999).level == 1
    assert level_progress(1000).level == 2
    assert level_progress(None).total_xp == 0


def test_on_fire_threshold():
    assert not is_on_fire(6)
    assert is_on_fire(7)


def test_streak_same_day_next_day_and_gap(db, user):
    assert record_activity(db, user, today=TODAY) == 1
    assert record_activity(db, user, today=TODAY) == 1
    assert record_activity(db, user, today=TODAY + timedelta(days=1)) == 2
    assert record_activity(db, user, today=TODAY + timedelta(days=2)) == 3

    # Missing a day resets the streak but keeps the best one
    assert record_activity(db, user, today=TODAY + timedelta(days=4)) == 1
    assert user.max_streak == 3
    assert user.last_active_date == TODAY + timedelta(days=4)


def test_thirty_day_streak_earns_consistency_king(db, user):
    for offset in range(29):
        record_activity(db, user, today=TODAY + timedelta(days=offset))
    assert not has_badge(db, user.id, "consistency-king")

    record_activity(db, user, today=TODAY + timedelta(days=29))
    assert user.streak_count == 30
    assert has_badge(db, user.id, "consistency-king")


def test_grant_xp_logs_activity(db, user):
    grant_xp(db, user, "Completed Tech Knowledge quiz", 75, today=TODAY)
    grant_xp(db, user, "Completed profile assessment", 100, today=TODAY)

    assert user.xp_points == 175
    assert user.streak_count == 1
    assert db.query(ActivityLog).filter_by(user_id=user.id).count() == 2
    assert [a.xp for a in recent_activity(db, user.id)] == [100, 75]


def test_award_badge_is_idempotent(db, user):
    assert award_badge(db, user.id, "profile-pioneer") is True
    assert award_badge(db, user.id, "profile-pioneer") is False
    assert award_badge(db, user.id, "no-such-badge") is False


def test_init_badges_is_idempotent(db):
    init_badges(db)
    assert db.query(Badge).count() == len(BADGE_DEFINITIONS)


def test_badge_board_marks_earned(db, user):
    award_badge(db, user.id, "quiz-master")

    board = badge_board(db, user)

    assert [b["slug"] for b in board] == [b["slug"] for b in BADGE_DEFINITIONS]
    assert {b["slug"] for b in board if b["earned"]} == {"quiz-master"}
