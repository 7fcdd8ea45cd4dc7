"""FastAPI 메인 애플리케이션"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from localjobs import __version__
from localjobs.config import settings
from localjobs.db import check_connection, init_firestore
from localjobs.logging_config import setup_logger
from localjobs.models.schemas import HealthResponse
from localjobs.routers import jobs_router, notifications_router, resume_router

logger = setup_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작/종료 시 실행"""
    logger.info(f"[LocalJobs API] 환경: {settings.ENVIRONMENT}")
    logger.info(f"[LocalJobs API] 프로젝트: {settings.GOOGLE_CLOUD_PROJECT}")
    init_firestore()
    yield
    logger.info("[LocalJobs API] 종료")


app = FastAPI(
    title="LocalJobs API",
    description="위치 기반 일자리 매칭 - 주변 워커 알림, 공고 거리/스킬 정렬, 이력서 파싱",
    version=__version__,
    lifespan=lifespan
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(notifications_router, tags=["notifications"])
app.include_router(jobs_router, tags=["jobs"])
app.include_router(resume_router, tags=["resume"])


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """헬스체크 엔드포인트"""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.ENVIRONMENT,
        services={
            "firestore": "connected" if check_connection() else "disconnected",
            "gemini": "configured" if settings.GEMINI_API_KEY else "unconfigured",
        },
    )


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": "LocalJobs API",
        "version": __version__,
        "docs": "/docs"
    }
