"""
메모리 기반 완료 기록
프로세스 재시작 시 기록이 사라집니다.
"""

import threading

from loguru import logger

from .base import CompletionLedger


class InMemoryLedger(CompletionLedger):
    """set + lock 기반 완료 기록"""

    name = "memory"

    def __init__(self):
        self._completed: set[str] = set()
        self._lock = threading.Lock()
        self.logger = logger.bind(source="InMemoryLedger")

    def contains_completed(self, quest_id: str) -> bool:
        with self._lock:
            return quest_id in self._completed

    def try_mark_completed(self, quest_id: str) -> bool:
        with self._lock:
            if quest_id in self._completed:
                return False
            self._completed.add(quest_id)

        self.logger.info(f"Quest completed: {quest_id}")
        return True

    def completed_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._completed)
