"""TypedDict 정의 - Firestore 문서 구조 타입 정의

Pydantic 모델은 API 요청/응답용이고, TypedDict는 저장소 원본 문서용입니다.
도메인 객체(models.domain)로 변환하기 전의 형태를 기술합니다.
"""

from typing import List, Optional, TypedDict


class NotificationPreferencesDoc(TypedDict, total=False):
    """알림 설정 (profiles.notification_preferences)"""
    job_alerts: bool
    location_radius_km: Optional[float]


class JobDoc(TypedDict, total=False):
    """공고 문서 (jobs 컬렉션)

    total=False로 설정하여 모든 필드를 선택적으로 처리합니다.
    """
    id: str
    job_provider_id: str
    title: str
    description: str
    wage: float
    location: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    pincode: Optional[str]
    required_skills: Optional[List[str]]
    notification_scope: str
    status: str
    created_at: str


class ProfileDoc(TypedDict, total=False):
    """프로필 문서 (profiles 컬렉션)"""
    user_id: str
    role: str
    latitude: Optional[float]
    longitude: Optional[float]
    pincode: Optional[str]
    skills: Optional[List[str]]
    profile_completion_percentage: Optional[int]
    notification_preferences: Optional[NotificationPreferencesDoc]
    worker_category: Optional[str]


class NotificationMetadataDoc(TypedDict, total=False):
    """알림 메타데이터"""
    distance_km: Optional[float]
    job_location: Optional[str]
    notification_scope: str


class NotificationDoc(TypedDict, total=False):
    """알림 문서 (notifications 컬렉션)"""
    user_id: str
    job_id: str
    title: str
    message: str
    type: str
    is_read: bool
    metadata: NotificationMetadataDoc
    created_at: str
