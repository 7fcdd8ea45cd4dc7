"""공고 목록 거리/스킬 주석 유틸리티

워커 기준 공고 목록에 거리와 스킬 배지를 붙이고 필터/정렬.
계산 로직과 필터링 로직을 분리하여 테스트 용이성 확보.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from localjobs.models.domain import Coordinate, Job, JobStatus, WorkerProfile
from localjobs.utils.distance import distance_between
from localjobs.utils.skills import SkillMatch, match_skills


class SortKey(str, Enum):
    """정렬 기준"""
    DISTANCE = "distance"  # 가까운 순
    WAGE = "wage"  # 임금 높은 순
    POSTED = "posted"  # 최신 순


@dataclass
class JobListing:
    """거리/스킬 정보가 붙은 공고

    Attributes:
        job: 원본 공고
        distance_km: 워커와의 거리 (좌표가 없으면 None)
        skill_match: 워커 스킬 기준 매칭 결과
    """
    job: Job
    distance_km: Optional[float] = None
    skill_match: SkillMatch = SkillMatch()

    def to_dict(self) -> Dict[str, Any]:
        """API 응답 형식의 dict 반환"""
        job = self.job
        return {
            "id": job.id,
            "title": job.title,
            "description": job.description,
            "location": job.location,
            "wage": float(job.wage),
            "required_skills": list(job.required_skills),
            "notification_scope": job.notification_scope.value,
            "posted_at": job.created_at,
            "distance_km": round(self.distance_km, 1) if self.distance_km is not None else None,
            "matched_skills": list(self.skill_match.matched),
            "match_percent": self.skill_match.match_percent,
        }


def calculate_distances(
    jobs: Sequence[Job],
    origin: Optional[Coordinate]
) -> List[Tuple[Job, Optional[float]]]:
    """공고 목록에 대한 거리 계산

    순수 계산 함수로, 필터링은 수행하지 않음.

    Returns:
        (공고, 거리) 튜플 목록. 어느 한쪽 좌표가 없으면 거리는 None
    """
    return [(job, distance_between(origin, job.coordinate)) for job in jobs]


def matches_search(job: Job, term: str) -> bool:
    """검색어가 제목/위치/요구 스킬에 포함되는지 (대소문자 무시)"""
    needle = (term or "").strip().lower()
    if not needle:
        return True

    if needle in job.title.lower():
        return True
    if job.location and needle in job.location.lower():
        return True
    return any(needle in skill.lower() for skill in job.required_skills)


def filter_by_radius(
    pairs: List[Tuple[Job, Optional[float]]],
    max_km: Optional[float] = None
) -> List[Tuple[Job, Optional[float]]]:
    """거리 필터

    Args:
        pairs: (공고, 거리) 튜플 목록
        max_km: 최대 거리
            - None: 필터 없음 (거리 계산 불가 공고도 포함)
            - 숫자: 해당 거리 이하만 포함 (거리 계산 불가 공고 제외)
    """
    if max_km is None:
        return list(pairs)

    return [
        (job, distance) for job, distance in pairs
        if distance is not None and distance <= max_km
    ]


def sort_listings(
    listings: List[JobListing],
    sort_key: Optional[SortKey] = None
) -> List[JobListing]:
    """안정 정렬. 정렬 기준 값이 없는 공고는 원래 순서대로 맨 뒤"""
    if sort_key is None:
        return list(listings)

    if sort_key == SortKey.WAGE:
        return sorted(listings, key=lambda l: l.job.wage, reverse=True)

    if sort_key == SortKey.DISTANCE:
        present = [l for l in listings if l.distance_km is not None]
        missing = [l for l in listings if l.distance_km is None]
        return sorted(present, key=lambda l: l.distance_km) + missing

    present = [l for l in listings if l.job.created_at is not None]
    missing = [l for l in listings if l.job.created_at is None]
    return sorted(present, key=lambda l: l.job.created_at, reverse=True) + missing


def build_listings(
    jobs: Sequence[Job],
    worker: WorkerProfile,
    max_km: Optional[float] = None,
    sort_key: Optional[SortKey] = None,
    search: str = "",
) -> List[JobListing]:
    """
    워커 기준 공고 목록 생성 (posted 상태만)

    순서: 검색어 → 거리 계산 → 거리 필터 → 스킬 배지 → 정렬
    """
    open_jobs = [
        job for job in jobs
        if job.status == JobStatus.POSTED and matches_search(job, search)
    ]

    pairs = filter_by_radius(calculate_distances(open_jobs, worker.coordinate), max_km)

    listings = [
        JobListing(
            job=job,
            distance_km=distance,
            skill_match=match_skills(job.required_skills, worker.skills),
        )
        for job, distance in pairs
    ]

    return sort_listings(listings, sort_key)
