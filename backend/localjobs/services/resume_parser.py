"""이력서 파싱 서비스

1. 이력서 파일 다운로드 (httpx)
2. PDF 텍스트 추출 (PyPDF2, 실패 시 원시 바이트에서 문자열 추출)
3. 텍스트 품질 검사 (스캔 이미지/암호화 PDF 사전 차단)
4. Gemini로 구조화 추출 (JSON 응답 모드)
5. 추출 결과 검증 및 신뢰도 판정

google.genai SDK 사용
"""

import io
import json
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError
from PyPDF2 import PdfReader

from localjobs.config import settings
from localjobs.exceptions import (
    AIRateLimitError,
    InsufficientResumeDataError,
    ResumeDownloadError,
    ResumeParseError,
    TextQualityError,
)
from localjobs.models.schemas import ExtractionMetadata, ParsedResume
from localjobs.utils.category import detect_worker_category

logger = logging.getLogger(__name__)

# 이력서 여부 판단 키워드
RESUME_KEYWORDS = [
    "experience", "education", "skills", "work",
    "email", "phone", "profile", "summary",
]

_READABLE_CHARS = re.compile(r"[a-zA-Z0-9\s@.,\-]")
_PDF_STRING_LITERAL = re.compile(r"\(([^)]+)\)")
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B-\x0C\x0E-\x1F\x7F-\x9F]")
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\s]")
_WHITESPACE = re.compile(r"\s+")
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


# =============================================================================
# Prompt
# =============================================================================
PARSE_PROMPT_TEMPLATE = """You are a strict resume parser. Extract ONLY information that is explicitly present in the resume.

CRITICAL RULES:
- If information is NOT found in the resume, return null - DO NOT make up or infer data
- DO NOT hallucinate names, emails, or phone numbers
- Only extract data that is clearly visible in the text
- If uncertain about any field, set it to null
- Be conservative - accuracy is more important than completeness

Extract the following information from this resume text:

Resume text:
{resume_text}

Extract ONLY if clearly present:
1. Personal information: first name, last name, email, phone number (Indian format: 10 digits)
2. Skills (technical and soft skills) - list all mentioned
3. Location/address with 6-digit pincode
4. Previous work experience: company, job title, duration, description, location

IMPORTANT: If you cannot find a piece of information, return null for that field. Do not make assumptions.

Return a JSON object with this structure:
{{
  "personal_info": {{
    "first_name": string | null,
    "last_name": string | null,
    "email": string | null,
    "phone": string | null
  }},
  "skills": string[],
  "location": {{
    "address": string | null,
    "pincode": string | null
  }},
  "previous_works": [{{
    "company_name": string,
    "job_title": string,
    "duration": string,
    "description": string | null,
    "location": string | null
  }}]
}}"""


def build_prompt(resume_text: str, max_chars: int) -> str:
    """파싱 프롬프트 생성 (텍스트는 max_chars까지만)"""
    return PARSE_PROMPT_TEMPLATE.format(resume_text=resume_text[:max_chars])


# =============================================================================
# 텍스트 추출 / 품질 검사
# =============================================================================

@dataclass
class TextQuality:
    """추출 텍스트 품질 평가

    Attributes:
        valid: AI 파싱 진행 가능 여부
        quality: poor / fair / good / excellent
        reason: 불합격 사유
        keywords_found: 발견된 이력서 키워드 수
    """
    valid: bool
    quality: str
    reason: str = ""
    keywords_found: int = 0


def validate_text_quality(text: str) -> TextQuality:
    """
    AI 호출 전 텍스트 품질 검사

    - 200자 미만: 스캔 이미지 또는 손상 파일
    - 이력서 키워드 2개 미만: 이력서가 아닐 가능성
    - 판독 가능 문자 비율 50% 미만: 암호화/깨진 PDF
    """
    if len(text) < 200:
        return TextQuality(
            False, "poor",
            reason="Text too short - file may be scanned image or corrupted"
        )

    lower_text = text.lower()
    found = [keyword for keyword in RESUME_KEYWORDS if keyword in lower_text]

    if len(found) < 2:
        return TextQuality(
            False, "poor",
            reason="No resume keywords found - this may not be a valid resume file",
            keywords_found=len(found)
        )

    readable_ratio = len(_READABLE_CHARS.findall(text)) / len(text)
    if readable_ratio < 0.5:
        return TextQuality(
            False, "poor",
            reason="Garbled text detected - PDF may be encrypted or corrupted",
            keywords_found=len(found)
        )

    quality = "good"
    if len(text) < 500 or len(found) < 3:
        quality = "fair"
    if len(text) > 2000 and len(found) >= 4 and readable_ratio > 0.8:
        quality = "excellent"

    return TextQuality(True, quality, keywords_found=len(found))


def extract_fallback_text(data: bytes) -> str:
    """PDF 파서 실패 시 원시 바이트에서 텍스트 추출

    1차: PDF 문자열 리터럴 "( ... )" 20개 초과 시 연결
    2차: 그래도 100자 미만이면 출력 가능한 ASCII만 추출
    """
    decoded = data.decode("utf-8", errors="replace")
    text = ""

    matches = _PDF_STRING_LITERAL.findall(decoded)
    if len(matches) > 20:
        text = " ".join(matches)
        text = re.sub(r"\\[nr]", " ", text)
        text = _WHITESPACE.sub(" ", text).strip()
        logger.info("PDF 문자열 리터럴 기반 추출 사용")

    if len(text) < 100:
        text = _CONTROL_CHARS.sub(" ", decoded)
        text = _NON_PRINTABLE.sub("", text)
        text = _WHITESPACE.sub(" ", text).strip()
        logger.info("ASCII 추출 사용 (최종 fallback)")

    return text


def extract_pdf_text(data: bytes) -> str:
    """PDF 텍스트 추출 (PyPDF2 우선, 실패하거나 비어 있으면 fallback)"""
    try:
        reader = PdfReader(io.BytesIO(data))
        text = "\n".join(page.extract_text() or "" for page in reader.pages)
        logger.info(f"PDF 파싱 성공: {len(reader.pages)}페이지, {len(text)}자")
        if text.strip():
            return text
    except Exception as e:
        logger.warning(f"PDF 파싱 실패, fallback 추출 시도: {e}")

    return extract_fallback_text(data)


# =============================================================================
# 추출 결과 검증
# =============================================================================

def validate_parsed_data(parsed: ParsedResume) -> Tuple[bool, List[str]]:
    """
    AI 추출 결과 검증 (잘못된 필드는 None으로 정리)

    - 전화번호: 숫자만 10자리, 6~9로 시작 (인도 휴대폰 형식)
    - 이메일: 기본 형식 검사
    - 핀코드: 숫자 6자리

    Returns:
        (최소 정보 충족 여부, 경고 목록)
    """
    warnings: List[str] = []
    info = parsed.personal_info

    if not info.first_name and not info.last_name:
        warnings.append("No name found in resume")

    if info.phone:
        clean_phone = re.sub(r"\D", "", info.phone)
        if len(clean_phone) != 10 or clean_phone[0] not in "6789":
            warnings.append(f"Invalid phone format: {info.phone}")
            info.phone = None
        else:
            info.phone = clean_phone

    if info.email and not _EMAIL.match(info.email):
        warnings.append(f"Invalid email format: {info.email}")
        info.email = None

    location = parsed.location
    if location.pincode:
        clean_pincode = re.sub(r"\D", "", location.pincode)
        if len(clean_pincode) != 6:
            warnings.append(f"Invalid pincode format: {location.pincode}")
            location.pincode = None
        else:
            location.pincode = clean_pincode

    has_name = bool(info.first_name or info.last_name)
    has_history = bool(parsed.skills or parsed.previous_works)
    if not (has_name and has_history):
        warnings.append("Insufficient data extracted - resume may be in unsupported format")

    return has_name and has_history, warnings


def determine_confidence(parsed: ParsedResume, warnings: List[str], quality: str) -> str:
    """신뢰도 판정 (high / medium / low)"""
    info = parsed.personal_info
    if not info.first_name or not info.last_name:
        return "low"
    if not parsed.skills and not parsed.previous_works:
        return "low"
    if len(warnings) > 2 or quality == "fair":
        return "medium"
    return "high"


# =============================================================================
# 서비스
# =============================================================================

class ResumeParserService:
    """이력서 파싱 서비스

    Args:
        genai_client: google.genai Client (None이면 첫 호출 시 생성)
        http_client: 다운로드용 httpx.AsyncClient (None이면 요청마다 생성)
    """

    def __init__(
        self,
        genai_client: Optional[genai.Client] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        model: Optional[str] = None,
        max_chars: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self._client = genai_client
        self._http_client = http_client
        self.model_name = model or settings.GEMINI_MODEL
        self.max_chars = max_chars or settings.RESUME_MAX_CHARS
        self.timeout = timeout or settings.RESUME_DOWNLOAD_TIMEOUT

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=settings.GEMINI_API_KEY)
        return self._client

    async def download(self, url: str) -> bytes:
        """이력서 파일 다운로드"""
        logger.info(f"이력서 다운로드: {url}")
        try:
            if self._http_client is not None:
                response = await self._http_client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                    response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ResumeDownloadError(
                f"Failed to download resume file: {status} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise ResumeDownloadError(f"Failed to download resume file: {e}") from e

        return response.content

    async def extract_structured(self, resume_text: str) -> ParsedResume:
        """Gemini로 구조화 추출

        Raises:
            AIRateLimitError: 429
            ResumeParseError: API 오류, 빈 응답, JSON/스키마 불일치
        """
        config = types.GenerateContentConfig(
            temperature=0.1,
            top_k=1,
            top_p=1,
            max_output_tokens=2048,
            response_mime_type="application/json",
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=build_prompt(resume_text, self.max_chars),
                config=config,
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini API 오류: {e.code} {e}")
            if e.code == 429:
                raise AIRateLimitError("Rate limit exceeded. Please try again in a moment.") from e
            raise ResumeParseError("Failed to parse resume with AI") from e

        text = response.text
        if not text:
            raise ResumeParseError("No response from AI")

        try:
            return ParsedResume.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"AI 응답 형식 오류: {e}")
            raise ResumeParseError("AI returned malformed resume data") from e

    async def parse(self, resume_url: str) -> ParsedResume:
        """
        이력서 URL → 구조화 데이터

        Raises:
            ResumeDownloadError, TextQualityError, AIRateLimitError,
            InsufficientResumeDataError, ResumeParseError
        """
        data = await self.download(resume_url)
        resume_text = extract_pdf_text(data)
        logger.info(f"추출 텍스트 길이: {len(resume_text)}자")

        quality = validate_text_quality(resume_text)
        if not quality.valid:
            logger.warning(f"텍스트 품질 검사 실패: {quality.reason}")
            raise TextQualityError(quality.reason)
        logger.info(f"텍스트 품질: {quality.quality}")

        parsed = await self.extract_structured(resume_text)
        parsed.extraction_metadata = ExtractionMetadata(
            text_length=len(resume_text),
            text_quality=quality.quality,
            resume_keywords_found=True,
        )

        valid, warnings = validate_parsed_data(parsed)
        if warnings:
            logger.warning(f"검증 경고: {warnings}")

        parsed.confidence = determine_confidence(parsed, warnings, quality.quality)
        parsed.warnings = warnings

        if not valid:
            raise InsufficientResumeDataError(warnings, parsed.model_dump())

        category = detect_worker_category(
            parsed.skills,
            [f"{w.job_title} {w.company_name}" for w in parsed.previous_works],
        )
        parsed.worker_category = category.value if category else None

        logger.info(
            f"이력서 파싱 완료: skills={len(parsed.skills)}, "
            f"works={len(parsed.previous_works)}, confidence={parsed.confidence}, "
            f"category={parsed.worker_category}"
        )
        return parsed
