"""워커용 공고 목록 서비스

프로필 완성도 게이트(settings.LISTING_MIN_COMPLETION, 기본 75%)를 통과한 워커에게만
거리/스킬 정보가 붙은 공고 목록을 반환.
"""

import logging
from typing import List, Optional

from localjobs.config import MatchingConfig, settings
from localjobs.db.repository import JobRepository
from localjobs.exceptions import NotFoundError, ProfileIncompleteError
from localjobs.utils.listing import JobListing, SortKey, build_listings

logger = logging.getLogger(__name__)


class JobListingService:
    """워커 기준 공고 목록 조회"""

    def __init__(
        self,
        repository: JobRepository,
        min_completion: Optional[int] = None,
    ):
        self.repository = repository
        self.min_completion = (
            settings.LISTING_MIN_COMPLETION if min_completion is None else min_completion
        )

    async def list_for_worker(
        self,
        worker_id: str,
        distance_filter: str = "all",
        sort_by: Optional[SortKey] = SortKey.DISTANCE,
        search: str = "",
    ) -> List[JobListing]:
        """
        공고 목록 조회

        Args:
            worker_id: 조회하는 워커 ID
            distance_filter: 거리 필터 프리셋 (all, nearby=3km, close=5km)
            sort_by: 정렬 기준 (None이면 조회 순서)
            search: 검색어 (제목/위치/스킬)

        Returns:
            JobListing 목록

        Raises:
            NotFoundError: 워커 프로필 없음
            ProfileIncompleteError: 프로필 완성도 미달
        """
        worker = await self.repository.get_worker_profile(worker_id)
        if worker is None:
            raise NotFoundError("worker profile", worker_id)

        if worker.profile_completion_percent < self.min_completion:
            raise ProfileIncompleteError(worker.profile_completion_percent, self.min_completion)

        jobs = await self.repository.list_open_jobs()
        max_km = MatchingConfig.get_radius(distance_filter)

        listings = build_listings(
            jobs,
            worker,
            max_km=max_km,
            sort_key=sort_by,
            search=search,
        )

        if worker.coordinate is None:
            logger.info(f"워커 좌표 없음, 거리 정보 없이 반환: {worker_id}")

        logger.info(
            f"공고 목록: {len(jobs)}건 → {len(listings)}건 "
            f"(worker={worker_id}, filter={distance_filter}, sort={sort_by})"
        )
        return listings
