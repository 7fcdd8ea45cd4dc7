"""도메인 모델 - 공고, 워커 프로필, 알림

Firestore 문서(dict)는 저장소 경계에서 한 번만 검증/변환하고,
매칭 로직은 항상 이 dataclass들만 다룹니다.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple, Union

from localjobs.exceptions import InvalidCoordinateError
from localjobs.models.types import JobDoc, NotificationDoc, ProfileDoc

logger = logging.getLogger(__name__)


class NotificationScope(str, Enum):
    """공고 알림 범위"""
    LOCAL = "local"  # 같은 우편번호(pincode)
    ALL = "all"  # 반경 + 프로필 완성도


class JobStatus(str, Enum):
    """공고 상태"""
    POSTED = "posted"
    ASSIGNED = "assigned"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.CANCELLED)

    def can_transition_to(self, target: "JobStatus") -> bool:
        """posted→assigned→completed, posted→cancelled 만 허용"""
        return target in _JOB_TRANSITIONS.get(self, ())


_JOB_TRANSITIONS = {
    JobStatus.POSTED: (JobStatus.ASSIGNED, JobStatus.CANCELLED),
    JobStatus.ASSIGNED: (JobStatus.COMPLETED,),
}


class ApplicationStatus(str, Enum):
    """지원 상태"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


class UserRole(str, Enum):
    WORKER = "worker"
    JOB_PROVIDER = "job_provider"
    ADMIN = "admin"


class WorkerCategory(str, Enum):
    """워커 직종 분류"""
    GENERAL_LABORER = "general_laborer"
    CONSTRUCTION_WORKER = "construction_worker"
    MECHANIC = "mechanic"
    PLUMBER = "plumber"
    ELECTRICIAN = "electrician"
    CARPENTER = "carpenter"
    PAINTER = "painter"
    WATCHMAN = "watchman"
    CLEANER = "cleaner"
    GARDENER = "gardener"
    DRIVER = "driver"
    WELDER = "welder"
    MASON = "mason"
    HELPER = "helper"


@dataclass(frozen=True)
class Coordinate:
    """위경도 좌표 (도 단위)

    범위를 벗어나면 InvalidCoordinateError. 보정(clamp/wrap)하지 않음.
    """
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidCoordinateError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidCoordinateError(f"longitude out of range: {self.longitude}")

    @classmethod
    def from_values(
        cls,
        latitude: Optional[float],
        longitude: Optional[float]
    ) -> Optional["Coordinate"]:
        """위도/경도 중 하나라도 없으면 None"""
        if latitude is None or longitude is None:
            return None
        return cls(float(latitude), float(longitude))


@dataclass
class NotificationPreferences:
    """워커 알림 설정

    Attributes:
        job_alerts_enabled: 공고 알림 수신 여부 (기본 True)
        radius_km: 알림 반경 (None이면 기본 반경 사용)
    """
    job_alerts_enabled: bool = True
    radius_km: Optional[float] = None

    @classmethod
    def from_dict(cls, raw: Optional[dict]) -> "NotificationPreferences":
        if not raw:
            return cls()

        job_alerts = raw.get("job_alerts")
        radius = raw.get("location_radius_km")
        return cls(
            job_alerts_enabled=True if job_alerts is None else bool(job_alerts),
            # 0, 음수, 빈 값은 미설정으로 간주
            radius_km=float(radius) if radius and float(radius) > 0 else None,
        )


@dataclass
class Job:
    """채용공고"""
    id: str
    provider_id: str
    title: str
    wage: Decimal
    coordinate: Optional[Coordinate] = None
    postal_code: Optional[str] = None
    required_skills: Tuple[str, ...] = ()
    notification_scope: NotificationScope = NotificationScope.ALL
    status: JobStatus = JobStatus.POSTED
    location: Optional[str] = None
    description: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, job_id: str, data: JobDoc) -> "Job":
        """Firestore 문서에서 Job 생성"""
        return cls(
            id=job_id,
            provider_id=data.get("job_provider_id", ""),
            title=data.get("title", ""),
            wage=_to_decimal(data.get("wage")),
            coordinate=_coordinate_from_doc(data, f"job {job_id}"),
            postal_code=normalize_postal_code(data.get("pincode")),
            required_skills=_unique_skills(data.get("required_skills") or []),
            notification_scope=NotificationScope(data.get("notification_scope") or "all"),
            status=JobStatus(data.get("status") or "posted"),
            location=data.get("location"),
            description=data.get("description") or "",
            created_at=normalize_datetime(data.get("created_at")),
        )


@dataclass
class WorkerProfile:
    """워커 프로필 (매칭에 필요한 필드만)"""
    user_id: str
    coordinate: Optional[Coordinate] = None
    postal_code: Optional[str] = None
    skills: Tuple[str, ...] = ()
    profile_completion_percent: int = 0
    notification_preferences: NotificationPreferences = field(
        default_factory=NotificationPreferences
    )
    role: UserRole = UserRole.WORKER
    worker_category: Optional[WorkerCategory] = None

    @classmethod
    def from_dict(cls, data: ProfileDoc) -> "WorkerProfile":
        """Firestore 문서에서 WorkerProfile 생성"""
        user_id = data.get("user_id", "")
        category = data.get("worker_category")
        completion = data.get("profile_completion_percentage") or 0
        return cls(
            user_id=user_id,
            coordinate=_coordinate_from_doc(data, f"profile {user_id}"),
            postal_code=normalize_postal_code(data.get("pincode")),
            skills=_unique_skills(data.get("skills") or []),
            profile_completion_percent=max(0, min(100, int(completion))),
            notification_preferences=NotificationPreferences.from_dict(
                data.get("notification_preferences")
            ),
            role=UserRole(data.get("role") or "worker"),
            worker_category=WorkerCategory(category) if category else None,
        )


@dataclass(frozen=True)
class NotificationRecord:
    """알림 레코드 (한 번 생성 후 변경 없음)"""
    user_id: str
    job_id: str
    scope: NotificationScope
    message: str
    distance_km: Optional[float] = None
    job_location: Optional[str] = None
    title: str = "New Job Available!"
    type: str = "job_alert"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def document_id(self) -> str:
        """(job_id, user_id) 기준 고유 문서 ID - 재전송 시 중복 방지"""
        return f"{self.job_id}_{self.user_id}"

    def to_dict(self) -> NotificationDoc:
        return {
            "user_id": self.user_id,
            "job_id": self.job_id,
            "title": self.title,
            "message": self.message,
            "type": self.type,
            "is_read": False,
            "metadata": {
                "distance_km": self.distance_km,
                "job_location": self.job_location,
                "notification_scope": self.scope.value,
            },
            "created_at": self.created_at.isoformat(),
        }


# ========== 변환 헬퍼 ==========

def normalize_postal_code(value: Optional[Any]) -> Optional[str]:
    """우편번호 정규화 (앞뒤 공백 제거만, 빈 값은 None)"""
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def normalize_datetime(dt: Union[datetime, str, None]) -> Optional[datetime]:
    """
    다양한 형태의 datetime을 UTC aware datetime으로 정규화

    Args:
        dt: datetime 객체, ISO 문자열, 또는 None

    Returns:
        UTC timezone aware datetime 또는 None
    """
    if dt is None:
        return None

    try:
        if isinstance(dt, str):
            dt = datetime.fromisoformat(dt.replace("Z", "+00:00"))

        if isinstance(dt, datetime):
            # timezone이 없으면 UTC로 가정
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt

    except (ValueError, TypeError):
        pass

    return None


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        logger.warning(f"잘못된 임금 값: {value!r}")
        return Decimal("0")


def _unique_skills(skills: Iterable[str]) -> Tuple[str, ...]:
    """공백 제거 + 대소문자 무시 중복 제거 (처음 등장한 표기 유지)"""
    seen = set()
    result: List[str] = []
    for skill in skills:
        cleaned = (skill or "").strip()
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        result.append(cleaned)
    return tuple(result)


def _coordinate_from_doc(data: dict, owner: str) -> Optional[Coordinate]:
    """문서의 latitude/longitude → Coordinate (범위 초과 시 좌표 없음 처리)"""
    try:
        return Coordinate.from_values(data.get("latitude"), data.get("longitude"))
    except (ValueError, TypeError) as e:
        logger.warning(f"잘못된 좌표 무시 ({owner}): {e}")
        return None
