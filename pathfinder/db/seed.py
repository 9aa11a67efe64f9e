"""
Sample catalog rows for the Explore page and the college list on the
school results page. Seeding only runs against empty tables so an
operator-managed catalog is never overwritten.
"""
import logging
from sqlalchemy.orm import Session
from pathfinder.db.models.catalog import College, Career, Course, InternshipRole

logger = logging.getLogger(__name__)

COLLEGES = [
    {
        "name": "Indian Institute of Technology Bombay", "location": "Powai, Mumbai",
        "city": "Mumbai", "state": "Maharashtra", "budget_min": 200000, "budget_max": 250000,
        "fee_type": "government", "min_mark": 90, "placement_percentage": 95,
        "scholarship_available": True,
        "courses_offered": ["B.Tech CSE", "B.Tech Electrical", "B.Tech Mechanical"],
        "facilities": ["Hostel", "Library", "Research Labs"],
    },
    {
        "name": "College of Engineering Pune", "location": "Shivajinagar, Pune",
        "city": "Pune", "state": "Maharashtra", "budget_min": 80000, "budget_max": 150000,
        "fee_type": "government", "min_mark": 85, "placement_percentage": 88,
        "scholarship_available": True,
        "courses_offered": ["B.Tech CSE", "B.Tech Civil", "B.Tech Mechanical"],
        "facilities": ["Hostel", "Library", "Sports Complex"],
    },
    {
        "name": "RV College of Engineering", "location": "Mysore Road, Bengaluru",
        "city": "Bengaluru", "state": "Karnataka", "budget_min": 250000, "budget_max": 400000,
        "fee_type": "private", "min_mark": 75, "placement_percentage": 90,
        "scholarship_available": False,
        "courses_offered": ["B.E CSE", "B.E ECE", "B.E ISE"],
        "facilities": ["Hostel", "Incubation Centre", "Library"],
    },
    {
        "name": "St. Xavier's College", "location": "Fort, Mumbai",
        "city": "Mumbai", "state": "Maharashtra", "budget_min": 20000, "budget_max": 45000,
        "fee_type": "private", "min_mark": 80, "placement_percentage": 70,
        "scholarship_available": True,
        "courses_offered": ["B.Sc", "B.A", "BMS"],
        "facilities": ["Library", "Auditorium"],
    },
    {
        "name": "Shri Ram College of Commerce", "location": "North Campus, Delhi",
        "city": "New Delhi", "state": "Delhi", "budget_min": 25000, "budget_max": 40000,
        "fee_type": "government", "min_mark": 95, "placement_percentage": 85,
        "scholarship_available": True,
        "courses_offered": ["B.Com (Hons)", "B.A Economics (Hons)"],
        "facilities": ["Library", "Placement Cell"],
    },
    {
        "name": "Madras Medical College", "location": "Park Town, Chennai",
        "city": "Chennai", "state": "Tamil Nadu", "budget_min": 10000, "budget_max": 30000,
        "fee_type": "government", "min_mark": 90, "placement_percentage": None,
        "scholarship_available": True,
        "courses_offered": ["MBBS", "B.Pharm"],
        "facilities": ["Hospital", "Hostel", "Library"],
    },
    {
        "name": "Osmania University College of Engineering", "location": "Amberpet, Hyderabad",
        "city": "Hyderabad", "state": "Telangana", "budget_min": None, "budget_max": None,
        "fee_type": "government", "min_mark": 80, "placement_percentage": 78,
        "scholarship_available": True,
        "courses_offered": ["B.E CSE", "B.E Civil"],
        "facilities": ["Hostel", "Library"],
    },
]

CAREERS = [
    {
        "name": "Software Developer",
        "description": "Designs, builds and maintains software applications.",
        "required_skills": ["Programming", "Data Structures", "Git", "Problem Solving"],
        "recommended_certifications": ["AWS Certified Developer", "Oracle Java SE"],
    },
    {
        "name": "Data Scientist",
        "description": "Extracts insight from data using statistics and machine learning.",
        "required_skills": ["Python", "SQL", "Statistics", "Machine Learning"],
        "recommended_certifications": ["Google Data Analytics", "TensorFlow Developer"],
    },
    {
        "name": "UI/UX Designer",
        "description": "Creates intuitive, accessible user interfaces and experiences.",
        "required_skills": ["Design", "Figma", "User Research", "Prototyping"],
        "recommended_certifications": ["Google UX Design"],
    },
    {
        "name": "Business Analyst",
        "description": "Bridges business needs and technical solutions using data.",
        "required_skills": ["Excel", "SQL", "Communication", "Requirements Gathering"],
        "recommended_certifications": ["IIBA ECBA"],
    },
    {
        "name": "DevOps Engineer",
        "description": "Automates delivery pipelines and runs reliable cloud infrastructure.",
        "required_skills": ["Linux", "Cloud Computing", "CI/CD", "Docker"],
        "recommended_certifications": ["AWS Solutions Architect", "CKA"],
    },
]

COURSES = [
    {
        "name": "B.Tech Computer Science", "stream": "Science",
        "description": "Four-year engineering degree in computing.",
        "related_subjects": ["Mathematics", "Physics", "Computer Science"],
        "related_interests": ["coding", "engineering", "research"],
    },
    {
        "name": "MBBS", "stream": "Science",
        "description": "Undergraduate medical degree.",
        "related_subjects": ["Biology", "Chemistry", "Physics"],
        "related_interests": ["medicine", "research", "social-work"],
    },
    {
        "name": "BBA", "stream": "Commerce",
        "description": "Bachelor of Business Administration.",
        "related_subjects": ["Commerce", "Economics", "English"],
        "related_interests": ["business"],
    },
    {
        "name": "B.Des", "stream": "Arts",
        "description": "Bachelor of Design covering product, fashion and communication design.",
        "related_subjects": ["Art", "English"],
        "related_interests": ["design", "arts"],
    },
    {
        "name": "B.A Psychology", "stream": "Arts",
        "description": "Study of human behaviour and mental processes.",
        "related_subjects": ["English", "History", "Biology"],
        "related_interests": ["social-work", "teaching", "research"],
    },
]

INTERNSHIP_ROLES = [
    {
        "title": "Web Development Intern",
        "description": "Build and ship features for a production web application.",
        "experience_level": "beginner",
        "required_skills": ["JavaScript", "React", "Web Development"],
        "recommended_for": ["Software Developer", "Full Stack Developer"],
    },
    {
        "title": "Data Analyst Intern",
        "description": "Clean data and build dashboards for business teams.",
        "experience_level": "beginner",
        "required_skills": ["Excel", "SQL", "Python"],
        "recommended_for": ["Data Scientist", "Business Analyst"],
    },
    {
        "title": "Machine Learning Intern",
        "description": "Train and evaluate models on real datasets.",
        "experience_level": "intermediate",
        "required_skills": ["Python", "Machine Learning"],
        "recommended_for": ["AI/ML Engineer", "Data Scientist"],
    },
    {
        "title": "Cloud Operations Intern",
        "description": "Help operate CI/CD pipelines and cloud infrastructure.",
        "experience_level": "intermediate",
        "required_skills": ["Cloud Computing", "Linux"],
        "recommended_for": ["DevOps Engineer"],
    },
]

CATALOG = [
    (College, COLLEGES),
    (Career, CAREERS),
    (Course, COURSES),
    (InternshipRole, INTERNSHIP_ROLES),
]


def seed_catalog(db: Session) -> int:
    """Inserts the sample rows into every empty catalog table. Returns rows added."""
    added = 0
    for model, rows in CATALOG:
        if db.query(model.id).first():
            continue
        db.add_all(model(**row) for row in rows)
        added += len(rows)
    db.commit()
    if added:
        logger.info(f"Seeded {added} catalog rows.")
    return added
