"""알림 발송 API 라우터"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from localjobs.exceptions import BatchWriteError
from localjobs.models.schemas import DispatchRequest, DispatchResponse
from localjobs.routers.deps import get_dispatcher
from localjobs.services.notifications import NotificationDispatcher

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/notifications/dispatch", response_model=DispatchResponse)
async def dispatch_notifications(
    request: DispatchRequest,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    공고 생성 이벤트 처리 - 주변 워커에게 알림 발송

    - local 범위: 같은 우편번호 워커
    - all 범위: 프로필 100% + 알림 반경 이내 워커
    - 공고가 없거나 위치 정보가 없으면 no-op (200)

    Args:
        request.job_id: 생성된 공고 ID (jobId도 허용)

    Returns:
        발송 결과 (알림 받은 워커 수)
    """
    try:
        result = await dispatcher.dispatch(request.job_id)
    except BatchWriteError as e:
        logger.error(f"알림 저장 실패: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to create notifications",
                "job_id": e.job_id,
                "attempted": e.attempted,
            },
        )

    return DispatchResponse(
        success=True,
        dispatched=result.dispatched,
        notified_workers=result.notified,
        message=result.message,
    )
