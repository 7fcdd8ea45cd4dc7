"""워커 직종 추정 유틸리티

이력서에서 추출한 스킬과 경력 텍스트로 직종(WorkerCategory) 추정.
"""

from typing import Dict, Iterable, List, Optional

from localjobs.models.domain import WorkerCategory

# 직종별 키워드 (WorkerCategory에 없는 직종은 매칭되어도 None 반환)
CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "driver": ["driver", "driving", "transport", "vehicle", "delivery", "cab", "taxi", "logistics"],
    "carpenter": ["carpenter", "carpentry", "woodwork", "furniture", "wood", "joinery"],
    "electrician": ["electrician", "electrical", "wiring", "circuit", "electric", "voltage"],
    "plumber": ["plumber", "plumbing", "pipe", "drainage", "sanitary", "water supply"],
    "mason": ["mason", "masonry", "bricklayer", "construction", "cement", "brick"],
    "painter": ["painter", "painting", "wall paint", "spray paint", "decorator"],
    "welder": ["welder", "welding", "fabrication", "metal work", "arc welding"],
    "mechanic": ["mechanic", "mechanical", "auto", "automobile", "vehicle repair", "engine"],
    "cleaner": ["cleaner", "cleaning", "housekeeping", "janitor", "sanitation"],
    "gardener": ["gardener", "gardening", "landscaping", "horticulture", "lawn"],
    "security": ["security", "guard", "watchman", "surveillance", "protection"],
    "cook": ["cook", "chef", "kitchen", "culinary", "food preparation", "catering"],
    "tailor": ["tailor", "sewing", "stitching", "garment", "alterations", "dressmaking"],
    "helper": ["helper", "assistant", "labor", "general work", "support staff"],
}


def detect_worker_category(
    skills: Iterable[str],
    work_titles: Iterable[str] = (),
) -> Optional[WorkerCategory]:
    """
    키워드 점수로 직종 추정

    Args:
        skills: 스킬 목록
        work_titles: 경력 문자열 목록 ("직함 회사명")

    Returns:
        최고 점수 직종 (동점이면 먼저 정의된 직종), 없거나 유효하지 않으면 None
    """
    all_text = " ".join([*skills, *work_titles]).lower()
    if not all_text.strip():
        return None

    best_category = None
    best_score = 0
    for category, keywords in CATEGORY_KEYWORDS.items():
        score = sum(1 for keyword in keywords if keyword in all_text)
        if score > best_score:
            best_category, best_score = category, score

    if best_category is None:
        return None

    try:
        return WorkerCategory(best_category)
    except ValueError:
        return None
