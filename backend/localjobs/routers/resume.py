"""이력서 파싱 API 라우터"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from localjobs.exceptions import (
    AIRateLimitError,
    InsufficientResumeDataError,
    ResumeDownloadError,
    ResumeParseError,
    TextQualityError,
)
from localjobs.models.schemas import ParsedResume, ResumeParseRequest
from localjobs.routers.deps import get_resume_parser
from localjobs.services.resume_parser import ResumeParserService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/resume/parse", response_model=ParsedResume)
async def parse_resume(
    request: ResumeParseRequest,
    parser: ResumeParserService = Depends(get_resume_parser),
):
    """
    이력서 파일 URL을 받아 구조화된 프로필 데이터 반환

    - 텍스트 품질 미달: 400 (suggestion 포함)
    - 최소 정보 부족: 400 (warnings, partialData 포함)
    - AI 레이트 리밋: 429
    - 다운로드 실패: 502
    """
    try:
        return await parser.parse(request.resume_url)

    except TextQualityError as e:
        return JSONResponse(
            status_code=400,
            content={"error": str(e), "suggestion": e.suggestion},
        )
    except InsufficientResumeDataError as e:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(e),
                "warnings": e.warnings,
                "partialData": e.partial_data,
            },
        )
    except AIRateLimitError as e:
        return JSONResponse(status_code=429, content={"error": str(e)})
    except ResumeDownloadError as e:
        logger.error(f"이력서 다운로드 실패: {e}")
        return JSONResponse(status_code=502, content={"error": str(e)})
    except ResumeParseError as e:
        logger.exception(f"이력서 파싱 오류: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
