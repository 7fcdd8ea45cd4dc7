"""Firestore 클라이언트 및 저장소 구현 모듈"""

import logging
from typing import List, Optional, Sequence, Set

from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore_v1.base_query import FieldFilter

from localjobs.config import MatchingConfig, settings
from localjobs.exceptions import BatchWriteError
from localjobs.models.domain import (
    Job,
    JobStatus,
    NotificationRecord,
    NotificationScope,
    UserRole,
    WorkerProfile,
)

logger = logging.getLogger(__name__)

# Firestore 클라이언트 (lazy initialization)
_db = None
_initialized = False


def init_firestore() -> None:
    """Firestore 클라이언트 초기화"""
    global _db, _initialized
    if _initialized:
        return

    _initialized = True

    try:
        from google.cloud import firestore
        from google.oauth2 import service_account

        # 서비스 계정 credentials 명시적 로드
        credentials_path = settings.GOOGLE_APPLICATION_CREDENTIALS
        if credentials_path:
            credentials = service_account.Credentials.from_service_account_file(
                credentials_path
            )
            _db = firestore.AsyncClient(
                project=settings.GOOGLE_CLOUD_PROJECT or None,
                credentials=credentials
            )
        else:
            # ADC 사용
            _db = firestore.AsyncClient(project=settings.GOOGLE_CLOUD_PROJECT or None)

        logger.info("[Firestore] 연결 성공")
    except Exception as e:
        logger.warning(f"[Firestore] 연결 실패: {e}")
        _db = None


def get_db():
    """Firestore 클라이언트 반환"""
    if not _initialized:
        init_firestore()
    return _db


def check_connection() -> bool:
    """Firestore 연결 상태 확인"""
    return _db is not None


class FirestoreRepository:
    """JobRepository의 Firestore 구현

    Args:
        db: firestore.AsyncClient
    """

    def __init__(self, db):
        self.db = db

    async def get_job(self, job_id: str) -> Optional[Job]:
        doc = await self.db.collection(MatchingConfig.JOBS_COLLECTION).document(job_id).get()
        if not doc.exists:
            return None
        return _job_from_doc(doc)

    async def get_worker_profile(self, user_id: str) -> Optional[WorkerProfile]:
        doc = await self.db.collection(MatchingConfig.PROFILES_COLLECTION).document(user_id).get()
        if not doc.exists:
            return None

        if doc.to_dict().get("role") != UserRole.WORKER.value:
            return None
        return _worker_from_doc(doc)

    async def list_candidate_workers(
        self,
        scope: NotificationScope,
        postal_code: Optional[str],
        min_completion: int,
    ) -> List[WorkerProfile]:
        query = self.db.collection(MatchingConfig.PROFILES_COLLECTION).where(
            filter=FieldFilter("role", "==", UserRole.WORKER.value)
        )

        if scope == NotificationScope.LOCAL:
            query = query.where(filter=FieldFilter("pincode", "==", postal_code))
        else:
            query = query.where(
                filter=FieldFilter("profile_completion_percentage", ">=", min_completion)
            )

        workers: List[WorkerProfile] = []
        async for doc in query.stream():
            worker = _worker_from_doc(doc)
            if worker is not None:
                workers.append(worker)
        return workers

    async def list_open_jobs(self) -> List[Job]:
        query = self.db.collection(MatchingConfig.JOBS_COLLECTION).where(
            filter=FieldFilter("status", "==", JobStatus.POSTED.value)
        )
        jobs: List[Job] = []
        async for doc in query.stream():
            job = _job_from_doc(doc)
            if job is not None:
                jobs.append(job)
        return jobs

    async def list_notified_user_ids(self, job_id: str) -> Set[str]:
        query = (
            self.db.collection(MatchingConfig.NOTIFICATIONS_COLLECTION)
            .where(filter=FieldFilter("job_id", "==", job_id))
            .select(["user_id"])
        )
        return {doc.get("user_id") async for doc in query.stream()}

    async def insert_notifications(self, records: Sequence[NotificationRecord]) -> int:
        """
        알림 배치 저장 (단일 WriteBatch, 1회 커밋)

        문서 ID는 {job_id}_{user_id} 고정이라 같은 이벤트가 재전송되어도
        덮어쓰기만 발생. 커밋은 전부 성공하거나 전부 실패.

        Raises:
            BatchWriteError: 커밋 실패 (시도한 수신자 수 포함, 저장된 알림 없음)
        """
        if not records:
            return 0

        collection = self.db.collection(MatchingConfig.NOTIFICATIONS_COLLECTION)
        batch = self.db.batch()
        for record in records:
            batch.set(collection.document(record.document_id), record.to_dict())

        try:
            await batch.commit()
        except GoogleAPIError as e:
            logger.error(f"알림 배치 저장 실패 ({records[0].job_id}): {e}")
            raise BatchWriteError(records[0].job_id, len(records)) from e

        return len(records)


# ========== 문서 변환 (잘못된 문서는 경고 후 제외) ==========

def _job_from_doc(doc) -> Optional[Job]:
    try:
        return Job.from_dict(doc.id, doc.to_dict())
    except (ValueError, TypeError) as e:
        logger.warning(f"잘못된 공고 문서 제외 ({doc.id}): {e}")
        return None


def _worker_from_doc(doc) -> Optional[WorkerProfile]:
    data = doc.to_dict()
    data.setdefault("user_id", doc.id)
    try:
        return WorkerProfile.from_dict(data)
    except (ValueError, TypeError) as e:
        logger.warning(f"잘못된 프로필 문서 제외 ({doc.id}): {e}")
        return None
