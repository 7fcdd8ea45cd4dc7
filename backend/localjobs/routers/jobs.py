"""워커 공고 목록 API 라우터"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from localjobs.exceptions import NotFoundError, ProfileIncompleteError
from localjobs.models.schemas import JobListingItem, JobListingResponse
from localjobs.routers.deps import get_listing_service
from localjobs.services.job_listing import JobListingService
from localjobs.utils.listing import SortKey

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/workers/{worker_id}/jobs", response_model=JobListingResponse)
async def list_jobs(
    worker_id: str,
    distance: str = Query(default="all", pattern="^(all|nearby|close)$"),
    sort: Optional[SortKey] = Query(default=SortKey.DISTANCE),
    q: str = Query(default="", max_length=100),
    service: JobListingService = Depends(get_listing_service),
):
    """
    워커 위치 기준 공고 목록

    Args:
        worker_id: 워커 ID
        distance: all | nearby(3km) | close(5km)
        sort: distance | wage | posted
        q: 검색어 (제목, 위치, 스킬)

    Returns:
        거리/스킬 배지가 붙은 공고 목록
    """
    try:
        listings = await service.list_for_worker(
            worker_id,
            distance_filter=distance,
            sort_by=sort,
            search=q,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProfileIncompleteError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return JobListingResponse(
        jobs=[JobListingItem(**listing.to_dict()) for listing in listings],
        total_count=len(listings),
        distance_filter=distance,
        sort_by=sort.value if sort else None,
    )
