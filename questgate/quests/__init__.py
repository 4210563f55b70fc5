"""
퀘스트 정의 모듈
"""

from questgate.config import Settings, settings as default_settings

from .store import QuestDefinitionStore


def create_quest_store(settings: Settings | None = None) -> QuestDefinitionStore:
    """설정된 정의 파일로 저장소 생성 (파일 미지정 시 빈 저장소)"""
    settings = settings or default_settings

    if settings.QUEST_DEFINITIONS_PATH:
        return QuestDefinitionStore.from_file(settings.QUEST_DEFINITIONS_PATH)
    return QuestDefinitionStore()


__all__ = ["QuestDefinitionStore", "create_quest_store"]
