from app.models.user import User
from app.models.job import Job
from app.models.candidate import Candidate
from app.models.application import Application
from app.models.interview import Interview
from app.models.activity import Activity

__all__ = ["User", "Job", "Candidate", "Application", "Interview", "Activity"]
