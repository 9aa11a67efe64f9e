from pathfinder.db.declarative import Base

# Importing the models package registers every table on Base.metadata
# so create_all() sees the full schema.
from pathfinder.db.models import (  # noqa: F401
    User,
    SchoolProfile,
    CollegeProfile,
    Recommendation,
    College,
    Career,
    Course,
    InternshipRole,
    Badge,
    UserBadge,
    ActivityLog,
    QuizAttempt,
)
