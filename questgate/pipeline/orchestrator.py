"""
Submission Pipeline
제출 처리 순서를 제어하고 최종 판정을 만듭니다.
"""

from loguru import logger

from questgate.config import Settings, settings as default_settings
from questgate.schemas.quest import AccessCondition, QuestSubmission
from questgate.schemas.results import Verdict, VerdictReason, VerdictStatus
from questgate.agents.eligibility_agent import EligibilityAgent, EligibilityInput
from questgate.agents.score_agent import ScoreAgent
from questgate.domain.scoring import ScoringEngine
from questgate.ledger import CompletionLedger
from questgate.quests import QuestDefinitionStore


class QuestSubmissionPipeline:
    """
    퀘스트 제출 파이프라인

    [1] 완료 기록 확인 → 이미 완료면 fail/0
    [2] 자격 조건 결정 (서버 등록 조건 우선)
    [3] 자격 판정 → 미달이면 fail/0 (점수화 생략)
    [4] 점수화 → success면 완료 기록 (원자적 check-and-mark)

    Agent 검증 실패(AgentError)와 기록 실패(LedgerError)는 그대로 전파되며,
    이 경우 완료 기록은 변경되지 않습니다.
    """

    def __init__(
        self,
        ledger: CompletionLedger,
        quest_store: QuestDefinitionStore | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or default_settings
        self.ledger = ledger
        self.quest_store = quest_store if quest_store is not None else QuestDefinitionStore()

        self.eligibility_agent = EligibilityAgent()
        self.score_agent = ScoreAgent(
            ScoringEngine(
                positive_vocabulary=self.settings.POSITIVE_VOCABULARY,
                denylist=self.settings.DENYLIST,
                success_threshold=self.settings.SUCCESS_THRESHOLD,
                positivity_cap=self.settings.POSITIVITY_CAP,
            )
        )

        self.logger = logger.bind(component="Pipeline")

    def run(self, submission: QuestSubmission) -> Verdict:
        """
        제출 1건 처리
        """
        quest_id = submission.quest_id
        self.logger.info(f"Submission received: quest={quest_id} user={submission.user_id}")

        # 1. 재제출 확인
        if self.ledger.contains_completed(quest_id):
            self.logger.info(f"Quest already completed: {quest_id}")
            return Verdict.rejected(VerdictReason.REPLAY)

        # 2. 자격 조건 결정
        conditions = self._resolve_conditions(submission)
        if conditions is None:
            return Verdict.rejected(VerdictReason.INELIGIBLE)

        # 3. 자격 판정
        eligibility = self.eligibility_agent.run(
            EligibilityInput(conditions=conditions, context=submission.to_context())
        )
        if not eligibility.granted:
            self.logger.info(f"Eligibility denied: quest={quest_id}")
            return Verdict.rejected(VerdictReason.INELIGIBLE)

        # 4. 점수화
        score_result = self.score_agent.run(submission.submission_text)
        status = VerdictStatus(score_result.status)

        if status == VerdictStatus.SUCCESS:
            # 동시 제출 중 하나만 기록에 성공
            if not self.ledger.try_mark_completed(quest_id):
                self.logger.warning(f"Concurrent completion lost: {quest_id}")
                return Verdict.rejected(VerdictReason.REPLAY)

        self.logger.info(f"Verdict: quest={quest_id} status={status.value} score={score_result.total}")

        return Verdict(
            status=status,
            score=score_result.total,
            reason=VerdictReason.SCORED,
        )

    def _resolve_conditions(
        self, submission: QuestSubmission
    ) -> list[AccessCondition] | None:
        """
        판정에 사용할 조건 목록

        Returns:
            조건 목록, 사용 가능한 조건이 없으면 None
        """
        definition = self.quest_store.get(submission.quest_id)

        if definition is not None:
            if submission.access_conditions and submission.access_conditions != definition.access_conditions:
                self.logger.warning(
                    f"Client conditions ignored for registered quest {submission.quest_id}"
                )
            return list(definition.access_conditions)

        if self.settings.TRUST_CLIENT_CONDITIONS:
            return list(submission.access_conditions)

        self.logger.warning(f"Unregistered quest rejected: {submission.quest_id}")
        return None
