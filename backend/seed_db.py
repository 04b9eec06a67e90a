"""
TalentTrack Database Seeder

Creates the demo data set (admin, recruiter, jobs, candidates with
applications across the pipeline, one upcoming interview).
All demo accounts use the password "password".

Usage: python seed_db.py
"""

import logging

from app.db.base import Base
from app.db.seed import seed_demo_data
from app.db.session import SessionLocal, engine
from app.models import Activity, Application, Candidate, Interview, Job, User  # noqa: F401
from app.storage import DatabaseStorage


def seed_database() -> None:
    """Create tables and seed the database with demo data."""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if seed_demo_data(DatabaseStorage(db)):
            print("Database seeded successfully!")
            print("  Admin:     admin / password")
            print("  Recruiter: sarah / password")
            print("  Candidate: michael / password")
        else:
            print("Database already seeded. Skipping...")
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_database()
