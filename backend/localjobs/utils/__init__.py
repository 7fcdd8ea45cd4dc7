"""매칭 유틸리티 모듈 - 알림 발송과 공고 목록이 공유"""

from .distance import haversine_km, distance_km, distance_between
from .eligibility import EligibilityResult, is_eligible
from .skills import SkillMatch, match_skills
from .listing import (
    SortKey,
    JobListing,
    calculate_distances,
    matches_search,
    filter_by_radius,
    sort_listings,
    build_listings,
)
from .category import detect_worker_category

__all__ = [
    # distance
    "haversine_km",
    "distance_km",
    "distance_between",
    # eligibility
    "EligibilityResult",
    "is_eligible",
    # skills
    "SkillMatch",
    "match_skills",
    # listing
    "SortKey",
    "JobListing",
    "calculate_distances",
    "matches_search",
    "filter_by_radius",
    "sort_listings",
    "build_listings",
    # category
    "detect_worker_category",
]
