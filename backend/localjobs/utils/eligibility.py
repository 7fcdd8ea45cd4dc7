"""알림 대상 판정 유틸리티

공고 1건과 워커 1명에 대해 알림 발송 여부와 표시용 거리를 계산.
알림 발송(notifications)과 테스트에서 공통으로 사용하는 순수 함수.

정책:
- local: 공고 우편번호 == 워커 우편번호 (거리는 표시용으로만 계산)
- all: 프로필 완성도 >= 기준 AND 좌표 모두 존재 AND 거리 <= 워커 반경
"""

from dataclasses import dataclass
from typing import Optional

from localjobs.config import settings
from localjobs.models.domain import Job, NotificationScope, WorkerProfile
from localjobs.utils.distance import distance_km


@dataclass(frozen=True)
class EligibilityResult:
    """판정 결과

    Attributes:
        eligible: 알림 대상 여부
        distance_km: 공고-워커 거리 (좌표가 없으면 None)
        reason: 제외 사유 (로그용, 대상이면 빈 문자열)
    """
    eligible: bool
    distance_km: Optional[float] = None
    reason: str = ""


def is_eligible(
    job: Job,
    worker: WorkerProfile,
    default_radius_km: Optional[float] = None,
    min_completion: Optional[int] = None,
) -> EligibilityResult:
    """
    워커가 공고 알림 대상인지 판정

    Args:
        job: 공고
        worker: 후보 워커
        default_radius_km: 워커 반경 미설정 시 기본값 (None이면 settings.DEFAULT_RADIUS_KM)
        min_completion: all 범위 최소 프로필 완성도 % (None이면 settings.BROADCAST_MIN_COMPLETION)

    Returns:
        EligibilityResult (필수 정보 누락은 에러가 아니라 비대상)
    """
    prefs = worker.notification_preferences
    if not prefs.job_alerts_enabled:
        return EligibilityResult(False, reason="alerts_disabled")

    if job.notification_scope == NotificationScope.LOCAL:
        return _check_local(job, worker)

    if default_radius_km is None:
        default_radius_km = settings.DEFAULT_RADIUS_KM
    if min_completion is None:
        min_completion = settings.BROADCAST_MIN_COMPLETION

    return _check_all(job, worker, default_radius_km, min_completion)


def _display_distance(job: Job, worker: WorkerProfile) -> Optional[float]:
    if job.coordinate is None or worker.coordinate is None:
        return None
    return distance_km(job.coordinate, worker.coordinate)


def _check_local(job: Job, worker: WorkerProfile) -> EligibilityResult:
    """local 범위: 우편번호 일치만 확인"""
    distance = _display_distance(job, worker)

    if job.postal_code is None:
        return EligibilityResult(False, distance, reason="job_missing_postal_code")
    if worker.postal_code != job.postal_code:
        return EligibilityResult(False, distance, reason="postal_code_mismatch")

    return EligibilityResult(True, distance)


def _check_all(
    job: Job,
    worker: WorkerProfile,
    default_radius_km: float,
    min_completion: int,
) -> EligibilityResult:
    """all 범위: 완성도 + 반경 확인"""
    distance = _display_distance(job, worker)

    if worker.profile_completion_percent < min_completion:
        return EligibilityResult(False, distance, reason="profile_incomplete")
    if distance is None:
        return EligibilityResult(False, reason="missing_coordinates")

    radius = worker.notification_preferences.radius_km or default_radius_km
    # 경계값 포함
    if distance > radius:
        return EligibilityResult(False, distance, reason="out_of_radius")

    return EligibilityResult(True, distance)
