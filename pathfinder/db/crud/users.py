from sqlalchemy.orm import Session
from pathfinder.db.models.user import User


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.lower()).first()


def create_user(
    db: Session,
    email: str,
    hashed_password: str,
    **kwargs
) -> User:
    user = User(
        email=email.lower(),
        hashed_password=hashed_password,
        **kwargs
    )

    db.add(user)
    db.commit()
    db.refresh(user)
    return user
