"""서비스 모듈"""
from .notifications import NotificationDispatcher, DispatchResult
from .job_listing import JobListingService
from .resume_parser import ResumeParserService

__all__ = [
    "NotificationDispatcher",
    "DispatchResult",
    "JobListingService",
    "ResumeParserService",
]
