from .notifications import router as notifications_router
from .jobs import router as jobs_router
from .resume import router as resume_router

__all__ = ["notifications_router", "jobs_router", "resume_router"]
