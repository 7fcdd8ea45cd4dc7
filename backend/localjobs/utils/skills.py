"""스킬 매칭 유틸리티

공고 요구 스킬과 워커 보유 스킬의 교집합으로 배지 표시용 매칭률 계산.
대소문자만 무시한 정확 일치 (부분 문자열, 어간 추출 없음).
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class SkillMatch:
    """스킬 매칭 결과

    Attributes:
        matched: 매칭된 스킬 (공고 요구 스킬의 표기 유지)
        match_percent: 매칭률 0~100 (요구 스킬이 없으면 0)
    """
    matched: Tuple[str, ...] = ()
    match_percent: int = 0


def _normalize(skill: str) -> str:
    return (skill or "").strip().lower()


def match_skills(required: Iterable[str], worker_skills: Iterable[str]) -> SkillMatch:
    """
    요구 스킬 대비 워커 스킬 매칭

    Args:
        required: 공고 요구 스킬
        worker_skills: 워커 보유 스킬

    Returns:
        SkillMatch
    """
    worker_set = {_normalize(s) for s in worker_skills if _normalize(s)}

    # 요구 스킬은 집합 의미 - 대소문자 무시 중복 제거, 처음 표기 유지
    required_unique: List[str] = []
    seen = set()
    for skill in required:
        key = _normalize(skill)
        if not key or key in seen:
            continue
        seen.add(key)
        required_unique.append(skill.strip())

    if not required_unique:
        return SkillMatch()

    matched = tuple(s for s in required_unique if _normalize(s) in worker_set)
    # 0.5는 올림 (round()의 은행가 반올림 대신)
    percent = math.floor(100 * len(matched) / len(required_unique) + 0.5)

    return SkillMatch(matched=matched, match_percent=percent)
