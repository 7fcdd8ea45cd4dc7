"""서비스 커스텀 예외 모듈"""

from typing import Any, Dict, List, Optional


class LocalJobsError(Exception):
    """서비스 기본 예외"""
    pass


class NotFoundError(LocalJobsError):
    """공고/프로필 조회 실패 예외"""

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")


class InvalidCoordinateError(LocalJobsError, ValueError):
    """위도/경도 범위 초과 예외"""
    pass


class BatchWriteError(LocalJobsError):
    """알림 배치 저장 실패 예외 (부분 성공 없음)"""

    def __init__(self, job_id: str, attempted: int):
        self.job_id = job_id
        self.attempted = attempted
        super().__init__(
            f"Failed to create notifications for job {job_id} ({attempted} recipients)"
        )


class ProfileIncompleteError(LocalJobsError):
    """프로필 완성도 부족으로 공고 목록 접근 불가"""

    def __init__(self, completion: int, required: int):
        self.completion = completion
        self.required = required
        super().__init__(
            f"Profile is {completion}% complete, {required}% required to browse jobs"
        )


# ========== 이력서 파싱 ==========

class ResumeParseError(LocalJobsError):
    """이력서 파싱 기본 예외"""
    pass


class ResumeDownloadError(ResumeParseError):
    """이력서 파일 다운로드 실패"""
    pass


class TextQualityError(ResumeParseError):
    """추출 텍스트 품질 미달 (스캔 이미지, 암호화 PDF 등)"""

    suggestion = (
        "Please ensure your resume is a text-based PDF (not a scanned image). "
        "If needed, try converting to DOCX or plain text format."
    )


class AIRateLimitError(ResumeParseError):
    """Gemini API 레이트 리밋 초과 (429)"""
    pass


class InsufficientResumeDataError(ResumeParseError):
    """이력서에서 최소 정보를 추출하지 못함"""

    def __init__(self, warnings: List[str], partial_data: Optional[Dict[str, Any]] = None):
        self.warnings = warnings
        self.partial_data = partial_data
        super().__init__("Could not extract sufficient information from resume")
