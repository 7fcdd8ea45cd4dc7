"""공고 알림 발송 서비스

공고 생성 이벤트 1건당 1회 실행. 내부 재시도 없음.

1. 공고 조회 (없거나 all 범위인데 좌표 없으면 no-op)
2. 후보 워커 조회 (저장소 1차 필터)
3. 워커별 알림 대상 판정
4. 알림 일괄 저장 (실패 시 BatchWriteError)
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from localjobs.config import MatchingConfig, settings
from localjobs.db.repository import JobRepository
from localjobs.logging_config import log_timing
from localjobs.models.domain import Job, NotificationRecord, NotificationScope
from localjobs.utils.eligibility import is_eligible

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """알림 발송 결과

    Attributes:
        job_id: 공고 ID
        dispatched: 실제 발송 단계까지 진행했는지 (no-op이면 False)
        notified: 새로 저장한 알림 수
        candidates: 1차 필터 후보 수
        duplicates: 이미 알림을 받아 건너뛴 수
        message: 결과 메시지
    """
    job_id: str
    dispatched: bool
    notified: int = 0
    candidates: int = 0
    duplicates: int = 0
    message: str = ""

    @classmethod
    def no_op(cls, job_id: str, message: str) -> "DispatchResult":
        return cls(job_id=job_id, dispatched=False, message=message)


def format_wage(wage: Decimal) -> str:
    """임금 표시 (불필요한 소수점 제거)"""
    if wage == wage.to_integral_value():
        return str(wage.quantize(Decimal(1)))
    return str(wage.normalize())


def build_message(job: Job, distance_km: Optional[float]) -> str:
    """알림 본문: '{제목} - ₹{임금}/day - {위치 문구}'"""
    if job.notification_scope == NotificationScope.LOCAL or distance_km is None:
        location_msg = "in your area"
    else:
        location_msg = f"{distance_km:.1f}km away"
    return f"{job.title} - ₹{format_wage(job.wage)}/day - {location_msg}"


class NotificationDispatcher:
    """공고 생성 시 주변 워커에게 알림 발송"""

    def __init__(
        self,
        repository: JobRepository,
        default_radius_km: Optional[float] = None,
        min_completion: Optional[int] = None,
    ):
        self.repository = repository
        self.default_radius_km = (
            settings.DEFAULT_RADIUS_KM if default_radius_km is None else default_radius_km
        )
        self.min_completion = (
            settings.BROADCAST_MIN_COMPLETION if min_completion is None else min_completion
        )

    async def dispatch(self, job_id: str) -> DispatchResult:
        """
        공고 알림 발송

        Args:
            job_id: 생성된 공고 ID

        Returns:
            DispatchResult

        Raises:
            BatchWriteError: 알림 저장 실패
        """
        with log_timing(f"알림 발송 {job_id}", logger):
            return await self._dispatch(job_id)

    async def _dispatch(self, job_id: str) -> DispatchResult:
        job = await self.repository.get_job(job_id)
        if job is None:
            logger.info(f"공고 없음, 알림 건너뜀: {job_id}")
            return DispatchResult.no_op(job_id, "Job not found, skipping notifications")

        scope = job.notification_scope
        if scope == NotificationScope.ALL and job.coordinate is None:
            logger.info(f"좌표 없는 all 범위 공고, 알림 건너뜀: {job_id}")
            return DispatchResult.no_op(job_id, "Job has no location data, skipping notifications")

        if scope == NotificationScope.LOCAL and job.postal_code is None:
            logger.info(f"우편번호 없는 local 범위 공고, 알림 건너뜀: {job_id}")
            return DispatchResult.no_op(job_id, "Job has no pincode, skipping notifications")

        candidates = await self.repository.list_candidate_workers(
            scope=scope,
            postal_code=job.postal_code,
            min_completion=self.min_completion,
        )
        logger.info(f"후보 워커 {len(candidates)}명 (scope={scope.value}, job={job_id})")

        records = self._build_records(job, candidates)

        already_notified = await self.repository.list_notified_user_ids(job_id)
        new_records = [r for r in records if r.user_id not in already_notified]
        duplicates = len(records) - len(new_records)
        if duplicates:
            logger.warning(f"중복 알림 {duplicates}건 제외 (job={job_id})")

        notified = await self.repository.insert_notifications(new_records)
        logger.info(f"알림 대상: {len(candidates)}명 → {notified}명 (job={job_id})")

        return DispatchResult(
            job_id=job_id,
            dispatched=True,
            notified=notified,
            candidates=len(candidates),
            duplicates=duplicates,
            message=f"Notified {notified} workers within range",
        )

    def _build_records(self, job: Job, candidates) -> List[NotificationRecord]:
        """판정 통과 워커별 알림 레코드 생성 (워커당 1건)"""
        records: List[NotificationRecord] = []
        seen = set()

        for worker in candidates:
            if worker.user_id in seen:
                continue

            result = is_eligible(
                job,
                worker,
                default_radius_km=self.default_radius_km,
                min_completion=self.min_completion,
            )
            if not result.eligible:
                logger.debug(f"제외: {worker.user_id} ({result.reason})")
                continue

            seen.add(worker.user_id)
            records.append(NotificationRecord(
                user_id=worker.user_id,
                job_id=job.id,
                scope=job.notification_scope,
                message=build_message(job, result.distance_km),
                distance_km=result.distance_km,
                job_location=job.location,
                title=MatchingConfig.NOTIFICATION_TITLE,
                type=MatchingConfig.NOTIFICATION_TYPE,
            ))

        return records
