"""
QuestGate 설정 관리

모든 설정값은 .env 파일 또는 환경변수에서 관리합니다.
사용법:
    from questgate.config import settings
    threshold = settings.SUCCESS_THRESHOLD
"""

from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # .env에 정의되지 않은 변수 무시
    )

    # === 환경 ===
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # === 점수화 ===
    # 리스트 값은 환경변수에서 JSON 배열로 지정 (예: POSITIVE_VOCABULARY='["Happy"]')
    POSITIVE_VOCABULARY: list[str] = [
        "Joyful",
        "Happy",
        "Vibrant",
        "Thrilled",
        "Euphoric",
        "Cheerful",
        "Delighted",
    ]
    DENYLIST: list[str] = ["offensiveWord1", "offensiveWord2"]
    SUCCESS_THRESHOLD: int = 5
    POSITIVITY_CAP: int = 3

    # === 완료 기록 (ledger) ===
    # memory: 프로세스 재시작 시 소실 / file: JSON 파일에 영구 저장
    LEDGER_BACKEND: Literal["memory", "file"] = "memory"
    LEDGER_PATH: str = ".data/completed_quests.json"

    # === 퀘스트 정의 ===
    QUEST_DEFINITIONS_PATH: Optional[str] = None
    # 서버에 등록되지 않은 퀘스트는 요청 본문의 조건을 사용할지 여부
    TRUST_CLIENT_CONDITIONS: bool = True

    @field_validator("POSITIVE_VOCABULARY", "DENYLIST")
    @classmethod
    def _validate_terms(cls, v: list[str]) -> list[str]:
        # 빈 문자열은 모든 텍스트에 매칭되므로 허용하지 않음
        if any(not term for term in v):
            raise ValueError("empty term is not allowed")
        return list(dict.fromkeys(v))


# 싱글톤 인스턴스
settings = Settings()
