from pathfinder.db.models.user import User
from pathfinder.db.models.profile import SchoolProfile, CollegeProfile
from pathfinder.db.models.recommendation import Recommendation
from pathfinder.db.models.catalog import College, Career, Course, InternshipRole
from pathfinder.db.models.gamification import Badge, UserBadge, ActivityLog, QuizAttempt
