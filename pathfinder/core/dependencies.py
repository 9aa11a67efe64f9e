from typing import Optional
from fastapi import Request, Depends
from sqlalchemy.orm import Session, joinedload
from pathfinder.core.auth_guard import get_current_user_from_request, NotAuthenticatedError
from pathfinder.db.session import get_db
from pathfinder.db.models.user import User
from pathfinder.db.models.gamification import UserBadge


def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Resolves the session context for this request from the access token cookie.

    The user is loaded with badges eagerly so templates can render the
    gamification widgets after the session is closed.
    """
    user_id = get_current_user_from_request(request)
    if not user_id:
        return None

    return (
        db.query(User)
        .options(joinedload(User.badges).joinedload(UserBadge.badge))
        .filter(User.id == user_id)
        .first()
    )


def require_user(user: Optional[User] = Depends(get_current_user)) -> User:
    if not user:
        raise NotAuthenticatedError()
    return user
