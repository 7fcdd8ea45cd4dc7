"""환경 설정 모듈"""

from pydantic_settings import BaseSettings
from typing import Dict, Optional


class Settings(BaseSettings):
    # GCP
    GOOGLE_CLOUD_PROJECT: str = ""
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = None

    # Gemini API
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"

    # App
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    LOG_FILE: Optional[str] = None  # 파일 로깅 경로 (None이면 콘솔만)

    # Matching 정책
    DEFAULT_RADIUS_KM: float = 10.0
    BROADCAST_MIN_COMPLETION: int = 100  # all 범위 알림 대상 최소 프로필 완성도
    LISTING_MIN_COMPLETION: int = 75  # 공고 목록 열람 최소 프로필 완성도

    # Resume
    RESUME_MAX_CHARS: int = 10000
    RESUME_DOWNLOAD_TIMEOUT: float = 30.0

    @property
    def allowed_origins_list(self) -> list[str]:
        """CORS 허용 오리진 리스트"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


# ========== 매칭 상수 (중앙화) ==========

class MatchingConfig:
    """매칭/알림 관련 상수 중앙 관리"""

    # Firestore 컬렉션
    JOBS_COLLECTION = "jobs"
    PROFILES_COLLECTION = "profiles"
    NOTIFICATIONS_COLLECTION = "notifications"

    # 공고 목록 거리 필터 프리셋 (km, None이면 필터 없음)
    RADIUS_FILTERS: Dict[str, Optional[float]] = {
        "all": None,
        "nearby": 3.0,
        "close": 5.0,
    }

    # 알림 문구
    NOTIFICATION_TITLE = "New Job Available!"
    NOTIFICATION_TYPE = "job_alert"

    @classmethod
    def get_radius(cls, preset: str) -> Optional[float]:
        """거리 필터 프리셋 → km (알 수 없는 값은 필터 없음)"""
        return cls.RADIUS_FILTERS.get(preset)
