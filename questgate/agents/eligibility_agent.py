"""
Eligibility Agent
자격 조건을 판정합니다.
"""

from typing import Sequence

from .base import BaseAgent
from questgate.exceptions import AgentError
from questgate.schemas.quest import AccessCondition, UserClaimContext
from questgate.schemas.results import EligibilityResult
from questgate.domain.eligibility import EligibilityEngine


class EligibilityInput:
    """Eligibility Agent 입력"""
    def __init__(self, conditions: Sequence[AccessCondition], context: UserClaimContext):
        self.conditions = conditions
        self.context = context


class EligibilityAgent(BaseAgent[EligibilityInput, EligibilityResult]):
    """
    자격 판정 Agent

    규칙 기반 EligibilityEngine으로 판정하고,
    탈락 시 조건별 사유를 로그로 남깁니다.
    """

    name = "EligibilityAgent"

    def __init__(self, engine: EligibilityEngine | None = None):
        super().__init__()
        self.engine = engine or EligibilityEngine()

    def _validate_input(self, input_data: EligibilityInput) -> None:
        super()._validate_input(input_data)
        if not isinstance(input_data.context, UserClaimContext):
            raise AgentError(f"{self.name}: 클레임 컨텍스트가 없습니다.")
        if input_data.conditions is None:
            raise AgentError(f"{self.name}: 자격 조건 목록이 없습니다.")

    def _process(self, input_data: EligibilityInput) -> EligibilityResult:
        result = self.engine.evaluate(
            conditions=input_data.conditions,
            context=input_data.context,
        )

        for index, reason in result.failure_reasons.items():
            self.logger.info(f"Condition #{index} failed: {reason}")

        return result
