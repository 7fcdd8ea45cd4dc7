"""데이터 접근 인터페이스

서비스는 이 Protocol에만 의존하고, 구현체(Firestore 등)는
FastAPI 의존성에서 주입합니다. 공고/프로필은 읽기만, 알림은 배치 추가만.
"""

from typing import List, Optional, Protocol, Sequence, Set

from localjobs.models.domain import Job, NotificationRecord, NotificationScope, WorkerProfile


class JobRepository(Protocol):
    """공고/프로필/알림 저장소"""

    async def get_job(self, job_id: str) -> Optional[Job]:
        """공고 단건 조회 (없으면 None)"""
        ...

    async def get_worker_profile(self, user_id: str) -> Optional[WorkerProfile]:
        """워커 프로필 단건 조회 (없으면 None)"""
        ...

    async def list_candidate_workers(
        self,
        scope: NotificationScope,
        postal_code: Optional[str],
        min_completion: int,
    ) -> List[WorkerProfile]:
        """알림 후보 워커 조회 (서버측 1차 필터)

        - local: 우편번호 일치
        - all: 프로필 완성도 >= min_completion
        """
        ...

    async def list_open_jobs(self) -> List[Job]:
        """posted 상태 공고 목록"""
        ...

    async def list_notified_user_ids(self, job_id: str) -> Set[str]:
        """해당 공고 알림을 이미 받은 사용자 ID"""
        ...

    async def insert_notifications(self, records: Sequence[NotificationRecord]) -> int:
        """알림 배치 저장. 실패 시 BatchWriteError"""
        ...
