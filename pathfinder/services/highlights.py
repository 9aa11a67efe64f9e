"""
Static landing page content: the tip of the day, trending careers and success stories.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

TIPS = (
    "Practice coding for at least 30 minutes daily to build muscle memory.",
    "Network on LinkedIn - connect with professionals in your dream field.",
    "Start a side project to showcase your skills to recruiters.",
    "Read industry blogs to stay updated with latest trends.",
    "Take online courses during weekends to upskill faster.",
    "Attend virtual meetups and webinars in your field.",
    "Build a portfolio website to showcase your best work.",
    "Learn Git and GitHub - essential for any tech career.",
    "Practice mock interviews with friends or online platforms.",
    "Write technical blogs to establish your expertise.",
)


@dataclass(frozen=True)
class TrendingCareer:
    name: str
    growth: int  # percent
    seekers: int
    category: str


@dataclass(frozen=True)
class SuccessStory:
    name: str
    role: str
    company: str
    story: str
    badge: Optional[str] = None

    @property
    def initials(self) -> str:
        return self.name[:2].upper()


TRENDING_CAREERS = (
    TrendingCareer("AI/ML Engineer", 45, 12450, "Tech"),
    TrendingCareer("Data Scientist", 38, 9800, "Analytics"),
    TrendingCareer("Full Stack Developer", 32, 15200, "Tech"),
    TrendingCareer("Product Manager", 28, 7600, "Business"),
)

SUCCESS_STORIES = (
    SuccessStory(
        "Priya Sharma", "Data Scientist", "Google",
        "PathFinder helped me realize my passion for data science. The skill roadmap was exactly "
        "what I needed to transition from computer science.",
        badge="Top Achiever",
    ),
    SuccessStory(
        "Rahul Kumar", "Product Manager", "Microsoft",
        "I was confused between MBA and tech. PathFinder's personality test showed I'd excel in "
        "product management. Best decision ever!",
    ),
    SuccessStory(
        "Ananya Patel", "UX Designer", "Adobe",
        "Coming from arts, I didn't know design could be a career. PathFinder opened my eyes to "
        "UX design and I've never looked back.",
        badge="Rising Star",
    ),
)


def daily_tip_index(today: Optional[date] = None) -> int:
    """Index of the tip shown on a given day: the day of the month wrapped over TIPS."""
    today = today or date.today()
    return today.day % len(TIPS)


def pick_tip(index: Optional[int] = None, today: Optional[date] = None) -> tuple[int, str]:
    """
    Returns (index, tip). An explicit index (the refresh link) wins over the
    date and wraps around, so any integer is accepted.
    """
    if index is None:
        index = daily_tip_index(today)
    index %= len(TIPS)
    return index, TIPS[index]


def next_tip_index(index: int) -> int:
    return (index + 1) % len(TIPS)
