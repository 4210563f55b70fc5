"""
판정 Agent 기본 클래스
자격 판정, 점수화 등 제출 처리 단계가 공통으로 상속합니다.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from loguru import logger

from questgate.exceptions import AgentError

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseAgent(ABC, Generic[InputT, OutputT]):
    """
    판정 Agent 기본 클래스

    run()은 입력 검증 → 판정 → 출력 검증 순서로 실행합니다.
    검증 실패는 AgentError로 올리고, 어떤 예외든 Agent 이름과 함께
    로그를 남긴 뒤 파이프라인으로 전파합니다.
    """

    name: str = "BaseAgent"

    def __init__(self):
        self.logger = logger.bind(agent=self.name)

    def run(self, input_data: InputT) -> OutputT:
        try:
            self._validate_input(input_data)
            result = self._process(input_data)
            self._validate_output(result)
            return result

        except AgentError as e:
            self.logger.warning(f"{self.name} 검증 실패: {e}")
            raise
        except Exception as e:
            self.logger.error(f"{self.name} 처리 오류: {e}")
            raise

    @abstractmethod
    def _process(self, input_data: InputT) -> OutputT:
        """판정 로직 (서브클래스에서 구현)"""

    def _validate_input(self, input_data: InputT) -> None:
        """입력 검증 (필요시 오버라이드, 실패 시 AgentError)"""
        if input_data is None:
            raise AgentError(f"{self.name}: 판정할 입력이 없습니다.")

    def _validate_output(self, output_data: OutputT) -> None:
        """출력 검증 (필요시 오버라이드, 실패 시 AgentError)"""
        if output_data is None:
            raise AgentError(f"{self.name}: 판정 결과가 없습니다.")
