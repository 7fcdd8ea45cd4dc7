"""좌표 간 거리 계산 유틸리티 (Haversine)"""

import math
from typing import Optional

from localjobs.models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0  # 지구 평균 반경 (km)


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    두 좌표 간 대권 거리 계산 (km)

    Haversine 공식 사용
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lng2 - lng1)

    a = (math.sin(delta_phi / 2) ** 2 +
         math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Coordinate 간 거리 (km)"""
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def distance_between(
    a: Optional[Coordinate],
    b: Optional[Coordinate]
) -> Optional[float]:
    """둘 중 하나라도 좌표가 없으면 None (0이나 무한대로 대체하지 않음)"""
    if a is None or b is None:
        return None
    return distance_km(a, b)
