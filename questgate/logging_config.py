"""
로깅 설정
loguru 기본 sink를 설정된 레벨의 stderr sink로 교체합니다.
"""

import sys

from loguru import logger


def setup_logging(level: str = "INFO") -> None:
    """로그 레벨 적용"""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan> - <level>{message}</level>"
        ),
    )
