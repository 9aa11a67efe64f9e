import pytest

from pathfinder.db.models.catalog import College
from pathfinder.services.explore import search_catalog, filter_colleges, list_colleges


def names(rows):
    return sorted(getattr(r, "name", None) or r.title for r in rows)


def test_empty_query_returns_whole_catalog(db):
    results = search_catalog(db)
    assert {k: len(v) for k, v in results.items()} == {
        "colleges": 7, "careers": 5, "courses": 5, "internships": 4,
    }


def test_search_is_case_insensitive_per_section(db):
    results = search_catalog(db, query="DATA")

    assert names(results["careers"]) == ["Business Analyst", "Data Scientist"]
    assert names(results["internships"]) == ["Data Analyst Intern", "Machine Learning Intern"]
    assert results["colleges"] == []
    assert results["courses"] == []


def test_courses_match_on_stream(db):
    assert names(search_catalog(db, query="science")["courses"]) == ["B.Tech Computer Science", "MBBS"]


def test_college_state_filter_applies_after_query(db):
    assert names(search_catalog(db, query="mumbai")["colleges"]) == [
        "Indian Institute of Technology Bombay", "St. Xavier's College",
    ]
    assert names(search_catalog(db, state="karnataka")["colleges"]) == ["RV College of Engineering"]
    assert search_catalog(db, query="mumbai", state="Delhi")["colleges"] == []


@pytest.mark.parametrize("budget, expected", [
    ("low", ["Madras Medical College", "Osmania University College of Engineering",
             "Shri Ram College of Commerce", "St. Xavier's College"]),
    ("medium", ["College of Engineering Pune", "Osmania University College of Engineering"]),
    ("high", ["Indian Institute of Technology Bombay", "Osmania University College of Engineering",
              "RV College of Engineering"]),
])
def test_budget_bands(db, budget, expected):
    assert names(list_colleges(db, budget=budget)) == expected


def test_location_matches_city_state_or_location(db):
    assert names(list_colleges(db, location="maharashtra")) == [
        "College of Engineering Pune", "Indian Institute of Technology Bombay", "St. Xavier's College",
    ]
    assert names(list_colleges(db, location="powai")) == ["Indian Institute of Technology Bombay"]
    assert names(list_colleges(db, location="Mumbai", budget="low")) == ["St. Xavier's College"]


def test_filter_without_filters_keeps_everything():
    colleges = [College(name="A", location="X", budget_max=10), College(name="B", location="Y")]
    assert filter_colleges(colleges) == colleges
    assert filter_colleges(colleges, budget="all") == colleges


@pytest.mark.asyncio
async def test_explore_api(client):
    response = await client.get("/api/explore", params={"q": "intern"})

    assert response.status_code == 200
    body = response.json()
    assert len(body["internships"]) == 4
    assert set(body["internships"][0]) >= {"title", "description", "experience_level", "required_skills"}


@pytest.mark.asyncio
async def test_explore_page_is_public(client):
    response = await client.get("/explore", params={"q": "designer"})
    assert response.status_code == 200
    assert "UI/UX Designer" in response.text
