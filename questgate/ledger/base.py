"""
완료 기록 저장소 기본 클래스
"""

from abc import ABC, abstractmethod


class CompletionLedger(ABC):
    """
    퀘스트 완료 기록 (집합 semantics)

    - 한 번 기록된 퀘스트는 삭제되지 않습니다.
    - try_mark_completed는 확인과 기록을 원자적으로 수행합니다.
    """

    name: str = "ledger"

    @abstractmethod
    def contains_completed(self, quest_id: str) -> bool:
        """완료 여부 조회"""
        pass

    @abstractmethod
    def try_mark_completed(self, quest_id: str) -> bool:
        """
        미완료 상태일 때만 완료로 기록합니다.

        Returns:
            이번 호출로 기록되었으면 True, 이미 기록되어 있었으면 False
        """
        pass

    @abstractmethod
    def completed_ids(self) -> list[str]:
        """기록된 퀘스트 ID 목록"""
        pass

    def mark_completed(self, quest_id: str) -> None:
        """완료로 기록 (이미 기록되어 있으면 무시)"""
        self.try_mark_completed(quest_id)

    def __contains__(self, quest_id: str) -> bool:
        return self.contains_completed(quest_id)

    def __len__(self) -> int:
        return len(self.completed_ids())
