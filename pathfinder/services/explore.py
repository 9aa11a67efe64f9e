from typing import Iterable, Optional
from sqlalchemy.orm import Session
from pathfinder.db.models.catalog import College, Career, Course, InternshipRole

LOW_BUDGET_MAX = 50000
HIGH_BUDGET_MIN = 200000


def _contains(value: Optional[str], needle: str) -> bool:
    return needle in (value or "").lower()


def _matches_any(needle: str, *values: Optional[str]) -> bool:
    return any(_contains(v, needle) for v in values)


def search_catalog(db: Session, query: str = "", state: str = "") -> dict:
    """
    Case-insensitive search across the catalog, as shown on the Explore page.
    An empty query matches everything; the state filter only applies to colleges.
    """
    q = (query or "").strip().lower()
    state = (state or "").strip().lower()

    colleges = [
        c for c in db.query(College).order_by(College.name).all()
        if _matches_any(q, c.name, c.location)
        and (not state or _contains(c.state, state))
    ]
    careers = [c for c in db.query(Career).order_by(Career.name).all() if _matches_any(q, c.name, c.description)]
    courses = [c for c in db.query(Course).order_by(Course.name).all() if _matches_any(q, c.name, c.stream)]
    internships = [
        i for i in db.query(InternshipRole).order_by(InternshipRole.title).all()
        if _matches_any(q, i.title, i.description)
    ]

    return {
        "colleges": colleges,
        "careers": careers,
        "courses": courses,
        "internships": internships,
    }


def in_budget_band(college: College, band: str) -> bool:
    # Colleges without published fees are never filtered out
    if not college.budget_max:
        return True
    if band == "low":
        return college.budget_max <= LOW_BUDGET_MAX
    if band == "medium":
        return (college.budget_min or 0) >= LOW_BUDGET_MAX and college.budget_max <= HIGH_BUDGET_MIN
    if band == "high":
        return (college.budget_min or 0) >= HIGH_BUDGET_MIN
    return True


def filter_colleges(colleges: Iterable[College], location: str = "", budget: str = "") -> list[College]:
    """College list filter on the school results page."""
    location = (location or "").strip().lower()
    result = []
    for college in colleges:
        if location and not _matches_any(location, college.city, college.state, college.location):
            continue
        if budget and budget != "all" and not in_budget_band(college, budget):
            continue
        result.append(college)
    return result


def list_colleges(db: Session, location: str = "", budget: str = "") -> list[College]:
    return filter_colleges(db.query(College).order_by(College.name).all(), location, budget)


def as_dict(row) -> dict:
    return {column.name: getattr(row, column.name) for column in row.__table__.columns}


def serialize_catalog(results: dict) -> dict:
    return {section: [as_dict(row) for row in rows] for section, rows in results.items()}
