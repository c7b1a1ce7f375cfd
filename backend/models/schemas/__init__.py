"""Domain records shared by services and routes."""

from models.schemas.application import STATUS_ORDER, Application, ApplicationStatus
from models.schemas.cv_profile import CvProfile, Skill
from models.schemas.job_match import JobMatchCandidate
from models.schemas.notification import NewNotification, Notification

__all__ = [
    "STATUS_ORDER",
    "Application",
    "ApplicationStatus",
    "CvProfile",
    "Skill",
    "JobMatchCandidate",
    "NewNotification",
    "Notification",
]
