"""
완료 기록 모듈
"""

from questgate.config import Settings, settings as default_settings

from .base import CompletionLedger
from .memory import InMemoryLedger
from .file_ledger import FileLedger


def create_ledger(settings: Settings | None = None) -> CompletionLedger:
    """설정된 백엔드로 완료 기록 생성"""
    settings = settings or default_settings

    if settings.LEDGER_BACKEND == "file":
        return FileLedger(settings.LEDGER_PATH)
    return InMemoryLedger()


__all__ = [
    "CompletionLedger",
    "InMemoryLedger",
    "FileLedger",
    "create_ledger",
]
