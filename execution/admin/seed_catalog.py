"""
execution/admin/seed_catalog.py

Dev/test harness: seed the local catalog.

Inserts a small fixed set of courses and lessons into the local SQLite
database so the app has something to show. Idempotent on course and lesson
ids; existing rows are left alone.

THIS MODULE IS DEV-ONLY. The hosted backend's catalog is managed outside
this app.

Run from the repository root:
    python -m execution.admin.seed_catalog
"""

from execution.backend.base import COURSES, LESSONS
from execution.backend.local_backend import create_local_backend

# ---------------------------------------------------------------------------
# Fixture data: deterministic ids, ascending created_at.
# ---------------------------------------------------------------------------
SAMPLE_COURSES: list[dict] = [
    {
        "id": "course-python-basics",
        "title": "Python Basics",
        "description": "Variables, control flow, functions and modules, from the ground up.",
        "instructor": "Ada Park",
        "duration": "4 weeks",
        "image_url": "https://images.unsplash.com/photo-1515879218367-8466d910aaa4",
        "created_at": "2026-01-05T09:00:00+00:00",
    },
    {
        "id": "course-web-apps",
        "title": "Building Web Apps",
        "description": "Requests, templates, forms and sessions in a small web application.",
        "instructor": "Luis Romero",
        "duration": "6 weeks",
        "image_url": "https://images.unsplash.com/photo-1547658719-da2b51169166",
        "created_at": "2026-01-12T09:00:00+00:00",
    },
    {
        "id": "course-data-analysis",
        "title": "Intro to Data Analysis",
        "description": "Loading, cleaning and summarising tabular data.",
        "instructor": "Mei Tan",
        "duration": "5 weeks",
        "image_url": "https://images.unsplash.com/photo-1551288049-bebda4e38f71",
        "created_at": "2026-01-19T09:00:00+00:00",
    },
]

SAMPLE_LESSONS: list[dict] = [
    {"id": "lesson-pb-1", "course_id": "course-python-basics", "order_index": 1,
     "title": "Getting Started", "content": "Install Python and run your first script."},
    {"id": "lesson-pb-2", "course_id": "course-python-basics", "order_index": 2,
     "title": "Values and Variables", "content": "Numbers, strings and naming things."},
    {"id": "lesson-pb-3", "course_id": "course-python-basics", "order_index": 3,
     "title": "Control Flow", "content": "if statements and loops."},
    {"id": "lesson-wa-1", "course_id": "course-web-apps", "order_index": 10,
     "title": "How the Web Works", "content": "Requests, responses and status codes."},
    {"id": "lesson-wa-2", "course_id": "course-web-apps", "order_index": 20,
     "title": "Forms and Sessions", "content": "Accepting input and remembering users."},
    {"id": "lesson-da-1", "course_id": "course-data-analysis", "order_index": 1,
     "title": "Reading Data", "content": "CSV files and data frames."},
    {"id": "lesson-da-2", "course_id": "course-data-analysis", "order_index": 2,
     "title": "Summaries", "content": "Grouping, counting and averaging."},
]


def seed_catalog(db_path: str | None = None) -> dict:
    """Insert SAMPLE_COURSES and SAMPLE_LESSONS that are not present yet.

    Args:
        db_path: Path to the SQLite file. Defaults to tmp/app.db.
                 Tests must always supply an explicit isolated path.

    Returns:
        dict with keys:
            ok               (bool) Always True on success.
            courses_created  (int)  Number of course rows inserted.
            lessons_created  (int)  Number of lesson rows inserted.
            message          (str)  e.g. "Seeded 3 courses and 7 lessons."
    """
    data = create_local_backend(db_path=db_path).data

    courses_created = 0
    for course in SAMPLE_COURSES:
        if data.select_one(COURSES, {"id": course["id"]}) is None:
            data.insert(COURSES, course)
            courses_created += 1

    lessons_created = 0
    for lesson in SAMPLE_LESSONS:
        if data.select_one(LESSONS, {"id": lesson["id"]}) is None:
            data.insert(LESSONS, lesson)
            lessons_created += 1

    return {
        "ok": True,
        "courses_created": courses_created,
        "lessons_created": lessons_created,
        "message": f"Seeded {courses_created} courses and {lessons_created} lessons.",
    }


if __name__ == "__main__":
    print(seed_catalog()["message"])
