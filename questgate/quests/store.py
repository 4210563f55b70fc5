"""
퀘스트 정의 저장소
퀘스트별 자격 조건을 서버 측에서 관리합니다.
"""

import json
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from questgate.exceptions import QuestDefinitionError
from questgate.schemas.quest import QuestDefinition


_definitions_adapter = TypeAdapter(list[QuestDefinition])


class QuestDefinitionStore:
    """
    퀘스트 정의 저장소

    등록된 퀘스트는 클라이언트가 보낸 조건 대신
    여기에 저장된 조건으로 자격을 판정합니다.
    """

    def __init__(self, definitions: Optional[list[QuestDefinition]] = None):
        self._definitions: dict[str, QuestDefinition] = {}
        self.logger = logger.bind(source="QuestDefinitionStore")

        for definition in definitions or []:
            self.register(definition)

    @classmethod
    def from_file(cls, path: str) -> "QuestDefinitionStore":
        """JSON 파일에서 정의 로드"""
        store = cls()
        store.load_file(path)
        return store

    def load_file(self, path: str) -> int:
        """
        JSON 파일의 퀘스트 정의를 등록합니다.

        파일 형식: QuestDefinition 객체의 배열

        Returns:
            등록된 정의 수
        """
        file_path = Path(path)

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            definitions = _definitions_adapter.validate_python(raw)
        except (OSError, ValueError, ValidationError) as e:
            raise QuestDefinitionError(f"퀘스트 정의 로드 실패: {file_path} ({e})") from e

        for definition in definitions:
            self.register(definition)

        self.logger.info(f"Loaded {len(definitions)} quest definitions from {file_path}")
        return len(definitions)

    def register(self, definition: QuestDefinition) -> None:
        """정의 등록 (같은 ID는 덮어씀)"""
        if definition.quest_id in self._definitions:
            self.logger.warning(f"Quest definition replaced: {definition.quest_id}")
        self._definitions[definition.quest_id] = definition

    def get(self, quest_id: str) -> Optional[QuestDefinition]:
        return self._definitions.get(quest_id)

    def __contains__(self, quest_id: str) -> bool:
        return quest_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
