"""FastAPI 의존성 - 요청마다 저장소/서비스 주입

테스트에서는 app.dependency_overrides[get_repository]로 교체합니다.
"""

from fastapi import Depends, HTTPException

from localjobs.db import FirestoreRepository, JobRepository, get_db
from localjobs.services.job_listing import JobListingService
from localjobs.services.notifications import NotificationDispatcher
from localjobs.services.resume_parser import ResumeParserService


def get_repository() -> JobRepository:
    """Firestore 저장소 (미연결이면 503)"""
    db = get_db()
    if db is None:
        raise HTTPException(status_code=503, detail="데이터베이스에 연결할 수 없습니다.")
    return FirestoreRepository(db)


def get_dispatcher(
    repository: JobRepository = Depends(get_repository),
) -> NotificationDispatcher:
    return NotificationDispatcher(repository)


def get_listing_service(
    repository: JobRepository = Depends(get_repository),
) -> JobListingService:
    return JobListingService(repository)


def get_resume_parser() -> ResumeParserService:
    return ResumeParserService()
