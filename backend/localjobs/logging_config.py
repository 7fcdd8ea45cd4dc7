"""서비스 로깅 설정 모듈"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Optional

from localjobs.config import settings


# 로거 이름 상수 (하위 모듈 로거는 localjobs.* 로 전파)
LOGGER_NAME = "localjobs"


def setup_logger(
    name: str = LOGGER_NAME,
    level: Optional[int] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    서비스 로거 설정

    Args:
        name: 로거 이름
        level: 로그 레벨 (None이면 settings.LOG_LEVEL 사용)
        log_file: 파일 출력 경로 (None이면 settings.LOG_FILE 사용)

    Returns:
        설정된 로거
    """
    logger = logging.getLogger(name)

    # 이미 핸들러가 설정되어 있으면 스킵
    if logger.handlers:
        return logger

    # 로그 레벨 결정 (환경변수 우선)
    if level is None:
        level_name = settings.LOG_LEVEL.upper()
        level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)

    if log_file is None:
        log_file = settings.LOG_FILE

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # 콘솔 핸들러
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 파일 핸들러 (옵션)
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # uvicorn 루트 로거로 중복 출력 방지
    logger.propagate = False

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """로거 인스턴스 반환"""
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logger(name)
    return logger


@contextmanager
def log_timing(operation: str, logger: Optional[logging.Logger] = None):
    """
    컨텍스트 매니저로 구간 소요시간 측정

    Usage:
        with log_timing("알림 발송"):
            await dispatcher.dispatch(job_id)
    """
    _logger = logger or get_logger()
    start_time = time.perf_counter()
    _logger.debug(f"[START] {operation}")

    try:
        yield
    finally:
        elapsed = time.perf_counter() - start_time
        _logger.info(f"[END] {operation} ({elapsed:.2f}s)")
