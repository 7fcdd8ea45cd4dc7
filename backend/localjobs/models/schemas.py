"""Pydantic 스키마 정의 - API 요청/응답 및 이력서 파싱 결과"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ========== 알림 발송 ==========

class DispatchRequest(BaseModel):
    """공고 생성 이벤트"""
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(
        ...,
        min_length=1,
        alias="jobId",
        description="생성된 공고 ID"
    )


class DispatchResponse(BaseModel):
    """알림 발송 결과"""
    success: bool
    dispatched: bool = Field(description="no-op이면 False")
    notified_workers: int = Field(default=0, description="새로 알림을 받은 워커 수")
    message: str


# ========== 공고 목록 ==========

class JobListingItem(BaseModel):
    """거리/스킬 배지가 붙은 공고"""
    id: str
    title: str
    description: str = ""
    location: Optional[str] = None
    wage: float
    required_skills: list[str] = Field(default_factory=list)
    notification_scope: str
    posted_at: Optional[datetime] = None
    distance_km: Optional[float] = Field(
        default=None,
        description="워커와의 거리 (좌표가 없으면 null)"
    )
    matched_skills: list[str] = Field(default_factory=list)
    match_percent: int = Field(default=0, ge=0, le=100)


class JobListingResponse(BaseModel):
    """공고 목록 응답"""
    jobs: list[JobListingItem]
    total_count: int
    distance_filter: str
    sort_by: Optional[str] = None


# ========== 이력서 파싱 ==========

class ResumeParseRequest(BaseModel):
    """이력서 파싱 요청"""
    model_config = ConfigDict(populate_by_name=True)

    resume_url: str = Field(
        ...,
        min_length=1,
        alias="resumeUrl",
        description="이력서 파일 URL (서명된 다운로드 URL)"
    )


class PersonalInfo(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ResumeLocation(BaseModel):
    address: Optional[str] = None
    pincode: Optional[str] = None


class PreviousWork(BaseModel):
    company_name: str = ""
    job_title: str = ""
    duration: str = ""
    description: Optional[str] = None
    location: Optional[str] = None

    @field_validator("company_name", "job_title", "duration", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or ""


class ExtractionMetadata(BaseModel):
    text_length: int
    text_quality: str
    resume_keywords_found: bool


class ParsedResume(BaseModel):
    """이력서 파싱 결과 (AI 응답을 경계에서 한 번 검증)"""
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    skills: list[str] = Field(default_factory=list)
    location: ResumeLocation = Field(default_factory=ResumeLocation)
    previous_works: list[PreviousWork] = Field(default_factory=list)
    confidence: Literal["high", "medium", "low"] = "low"
    extraction_metadata: Optional[ExtractionMetadata] = None
    warnings: list[str] = Field(default_factory=list)
    worker_category: Optional[str] = Field(
        default=None,
        description="스킬/경력 기반 추정 직종"
    )

    @field_validator("skills", "previous_works", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return value or []

    @field_validator("personal_info", "location", mode="before")
    @classmethod
    def _none_to_model(cls, value):
        return value or {}


# ========== 기타 ==========

class HealthResponse(BaseModel):
    """헬스체크 응답"""
    status: str
    version: str
    environment: str
    services: dict[str, str]
