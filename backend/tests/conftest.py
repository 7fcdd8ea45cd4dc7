"""
pytest fixtures - 인메모리 저장소와 테스트 데이터 팩토리
"""
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Set

import pytest

from localjobs.exceptions import BatchWriteError
from localjobs.models.domain import (
    Coordinate,
    Job,
    JobStatus,
    NotificationPreferences,
    NotificationRecord,
    NotificationScope,
    WorkerProfile,
)

# 뉴델리 코넛플레이스 부근
DELHI = Coordinate(28.6139, 77.2090)


class FakeRepository:
    """JobRepository 인메모리 구현 (Firestore 1차 필터 흉내)"""

    def __init__(
        self,
        jobs: Optional[List[Job]] = None,
        workers: Optional[List[WorkerProfile]] = None,
        fail_writes: bool = False,
    ):
        self.jobs: Dict[str, Job] = {job.id: job for job in jobs or []}
        self.workers: List[WorkerProfile] = list(workers or [])
        self.notifications: Dict[str, NotificationRecord] = {}
        self.fail_writes = fail_writes
        self.candidate_queries: List[tuple] = []

    async def get_job(self, job_id: str) -> Optional[Job]:
        return self.jobs.get(job_id)

    async def get_worker_profile(self, user_id: str) -> Optional[WorkerProfile]:
        for worker in self.workers:
            if worker.user_id == user_id:
                return worker
        return None

    async def list_candidate_workers(self, scope, postal_code, min_completion) -> List[WorkerProfile]:
        self.candidate_queries.append((scope, postal_code, min_completion))
        if scope == NotificationScope.LOCAL:
            return [w for w in self.workers if w.postal_code == postal_code]
        return [w for w in self.workers if w.profile_completion_percent >= min_completion]

    async def list_open_jobs(self) -> List[Job]:
        return [job for job in self.jobs.values() if job.status == JobStatus.POSTED]

    async def list_notified_user_ids(self, job_id: str) -> Set[str]:
        return {r.user_id for r in self.notifications.values() if r.job_id == job_id}

    async def insert_notifications(self, records: Sequence[NotificationRecord]) -> int:
        if not records:
            return 0
        if self.fail_writes:
            raise BatchWriteError(records[0].job_id, len(records))
        for record in records:
            self.notifications[record.document_id] = record
        return len(records)


def make_job(
    job_id: str = "job-1",
    coordinate: Optional[Coordinate] = DELHI,
    postal_code: Optional[str] = "110001",
    scope: NotificationScope = NotificationScope.ALL,
    required_skills=("Plumbing",),
    wage: str = "500",
    status: JobStatus = JobStatus.POSTED,
    **kwargs,
) -> Job:
    return Job(
        id=job_id,
        provider_id=kwargs.pop("provider_id", "provider-1"),
        title=kwargs.pop("title", "Pipe repair"),
        wage=Decimal(wage),
        coordinate=coordinate,
        postal_code=postal_code,
        required_skills=tuple(required_skills),
        notification_scope=scope,
        status=status,
        **kwargs,
    )


def make_worker(
    user_id: str = "worker-1",
    coordinate: Optional[Coordinate] = DELHI,
    postal_code: Optional[str] = "110001",
    completion: int = 100,
    alerts: bool = True,
    radius_km: Optional[float] = None,
    skills=("plumbing",),
) -> WorkerProfile:
    return WorkerProfile(
        user_id=user_id,
        coordinate=coordinate,
        postal_code=postal_code,
        skills=tuple(skills),
        profile_completion_percent=completion,
        notification_preferences=NotificationPreferences(
            job_alerts_enabled=alerts,
            radius_km=radius_km,
        ),
    )


@pytest.fixture
def repository():
    return FakeRepository()
