"""
파일 기반 완료 기록
완료된 퀘스트를 JSON 파일에 저장해 재시작 후에도 유지합니다.
"""

import json
import threading
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from questgate.exceptions import LedgerError
from .base import CompletionLedger


class FileLedger(CompletionLedger):
    """
    JSON 파일 기반 완료 기록
    - 시작 시 파일 전체를 메모리로 로드
    - 기록할 때마다 임시 파일에 쓰고 교체 (부분 쓰기 방지)
    """

    name = "file"

    def __init__(self, path: str = ".data/completed_quests.json"):
        self.path = Path(path)
        self._lock = threading.Lock()
        self.logger = logger.bind(source="FileLedger")
        self._completed: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        """파일에서 완료 기록 로드"""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                stored = json.load(f)
            completed = stored["completed"]
            if not isinstance(completed, dict):
                raise TypeError("'completed' must be an object")
        except (OSError, ValueError, KeyError, TypeError) as e:
            # 빈 기록으로 시작하면 재제출이 허용되므로 중단
            raise LedgerError(f"완료 기록 파일을 읽을 수 없습니다: {self.path} ({e})") from e

        self.logger.info(f"Ledger loaded: {len(completed)} quests from {self.path}")
        return {str(k): str(v) for k, v in completed.items()}

    def _save(self, completed: dict[str, str]) -> None:
        """임시 파일에 쓴 뒤 교체"""
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        stored = {
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "completed": completed,
        }

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(stored, f, ensure_ascii=False, indent=2)
            tmp_path.replace(self.path)
        except OSError as e:
            raise LedgerError(f"완료 기록 저장 실패: {self.path} ({e})") from e

    def contains_completed(self, quest_id: str) -> bool:
        with self._lock:
            return quest_id in self._completed

    def try_mark_completed(self, quest_id: str) -> bool:
        with self._lock:
            if quest_id in self._completed:
                return False

            updated = dict(self._completed)
            updated[quest_id] = datetime.now(timezone.utc).isoformat()
            # 저장 실패 시 메모리 상태도 변경하지 않음
            self._save(updated)
            self._completed = updated

        self.logger.info(f"Quest completed: {quest_id}")
        return True

    def completed_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._completed)

    def completed_at(self, quest_id: str) -> str | None:
        """완료 기록 시각 (ISO-8601)"""
        with self._lock:
            return self._completed.get(quest_id)

    def clear(self) -> int:
        """전체 기록 삭제 (운영자 CLI 전용)"""
        with self._lock:
            count = len(self._completed)
            self._save({})
            self._completed = {}
        self.logger.warning(f"Ledger cleared: {count} quests")
        return count

    def get_stats(self) -> dict:
        """기록 통계"""
        with self._lock:
            count = len(self._completed)
        size = self.path.stat().st_size if self.path.exists() else 0

        return {
            "count": count,
            "size_kb": round(size / 1024, 1),
            "path": str(self.path),
        }
