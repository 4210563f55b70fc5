"""
Score Agent
제출 텍스트의 점수를 산정합니다.
"""

from .base import BaseAgent
from questgate.exceptions import AgentError
from questgate.schemas.results import ScoreResult
from questgate.domain.scoring import ScoringEngine


class ScoreAgent(BaseAgent[str, ScoreResult]):
    """
    점수화 Agent

    규칙 기반 ScoringEngine을 사용하여 점수를 산정합니다.
    """

    name = "ScoreAgent"

    def __init__(self, engine: ScoringEngine | None = None):
        super().__init__()
        self.engine = engine or ScoringEngine()

    def _validate_input(self, input_data: str) -> None:
        super()._validate_input(input_data)
        if not isinstance(input_data, str) or not input_data:
            raise AgentError(f"{self.name}: 제출 텍스트는 비어 있지 않은 문자열이어야 합니다.")

    def _validate_output(self, output_data: ScoreResult) -> None:
        super()._validate_output(output_data)
        if not 0 <= output_data.total <= self.engine.max_score:
            raise AgentError(
                f"{self.name}: 점수 {output_data.total}가 범위 0~{self.engine.max_score}를 벗어났습니다."
            )

    def _process(self, input_data: str) -> ScoreResult:
        """점수 산정 실행"""
        result = self.engine.score(input_data)

        if result.breakdown.denylisted:
            self.logger.info(f"Denylisted terms found: {result.breakdown.denylist_hits}")

        return result
