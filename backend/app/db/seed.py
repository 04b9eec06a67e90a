"""
Demo data set: one admin, one recruiter, three open jobs, six candidates
with matching user accounts and applications spread over the pipeline, and
one upcoming interview.

Everything goes through the service layer, so the activity feed is populated
exactly as it would be by real use.
"""

import logging
from datetime import timedelta

from app.db.base import utcnow
from app.services import (
    create_application,
    create_candidate,
    create_job,
    register_user,
    schedule_interview,
)
from app.storage.base import Storage

logger = logging.getLogger("seed")

DEMO_PASSWORD = "password"

DEMO_JOBS = [
    {
        "title": "Senior Frontend Developer",
        "description": "We're looking for an experienced frontend developer to join our team.",
        "location": "San Francisco, CA (Remote)",
        "salary": "$120,000 - $150,000",
        "requirements": "5+ years of experience with React, TypeScript, and modern frontend tools.",
    },
    {
        "title": "Product Manager",
        "description": "Lead product development and strategy for our core platform.",
        "location": "New York, NY",
        "salary": "$130,000 - $160,000",
        "requirements": "3+ years of product management experience in SaaS products.",
    },
    {
        "title": "UX/UI Designer",
        "description": "Design beautiful and intuitive user interfaces for our products.",
        "location": "Austin, TX (Hybrid)",
        "salary": "$90,000 - $120,000",
        "requirements": "Portfolio showcasing UI/UX projects and 2+ years of experience.",
    },
]

# (username, full name, education, skills, stage, job index, cover letter)
DEMO_CANDIDATES = [
    ("michael", "Michael Rodriguez", "Computer Science, MIT",
     ["JavaScript", "React", "TypeScript"], "applied", 0,
     "I'm excited to apply for this position..."),
    ("emily", "Emily Chen", "MBA, Stanford",
     ["Product Strategy", "User Research", "Agile"], "applied", 1,
     "With my background in product management..."),
    ("thomas", "Thomas Wilson", "Computer Engineering, Berkeley",
     ["Node.js", "AWS", "MongoDB"], "screening", 0,
     "I believe my backend skills would complement..."),
    ("jessica", "Jessica Parker", "Design, RISD",
     ["Figma", "Adobe XD", "UI Design"], "interview", 2,
     "My design background makes me a perfect fit..."),
    ("david", "David Nguyen", "PhD Statistics, Harvard",
     ["Python", "Machine Learning", "Data Visualization"], "offer", 0,
     "I'm interested in applying my data science skills..."),
    ("alicia", "Alicia Moore", "Marketing, Northwestern",
     ["SEO", "Content Strategy", "Analytics"], "hired", 1,
     "I'm looking forward to bringing my marketing expertise..."),
]


def seed_demo_data(storage: Storage) -> bool:
    """Seed the demo data set. Returns False if it is already present."""
    if storage.get_user_by_username("sarah"):
        logger.info("Database already seeded. Skipping...")
        return False

    logger.info("Seeding demo data...")

    register_user(
        storage,
        username="admin",
        email="admin@example.com",
        password=DEMO_PASSWORD,
        full_name="Site Administrator",
        role="admin",
    )
    recruiter = register_user(
        storage,
        username="sarah",
        email="sarah@example.com",
        password=DEMO_PASSWORD,
        full_name="Sarah Johnson",
        role="recruiter",
        position="Senior Recruiter",
    )

    jobs = [create_job(storage, {**job, "status": "open"}, actor_id=recruiter.id) for job in DEMO_JOBS]

    interview_application = None
    for username, full_name, education, skills, stage, job_index, cover_letter in DEMO_CANDIDATES:
        email = f"{username}@example.com"
        create_candidate(
            storage,
            {
                "full_name": full_name,
                "email": email,
                "education": education,
                "skills": skills,
                "stage": stage,
            },
            actor_id=recruiter.id,
        )
        # Registering with the same email links the candidate record to the account
        user = register_user(
            storage,
            username=username,
            email=email,
            password=DEMO_PASSWORD,
            full_name=full_name,
            role="candidate",
        )
        application = create_application(
            storage,
            {
                "job_id": jobs[job_index].id,
                "user_id": user.id,
                "status": stage,
                "cover_letter": cover_letter,
            },
            actor_id=user.id,
        )
        if stage == "interview":
            interview_application = application

    if interview_application is not None:
        schedule_interview(
            storage,
            {
                "application_id": interview_application.id,
                "scheduled_at": utcnow() + timedelta(hours=2),
                "duration": 60,
                "location": "Zoom Meeting",
                "notes": "Focus on design process and portfolio review",
            },
            actor_id=recruiter.id,
        )

    logger.info("Demo data seeded")
    return True
