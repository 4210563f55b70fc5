"""
QuestGate 테스트 - Submission Pipeline
"""

import pytest
import sys
sys.path.insert(0, ".")

from questgate.config import Settings
from questgate.exceptions import AgentError
from questgate.ledger import InMemoryLedger
from questgate.pipeline import QuestSubmissionPipeline
from questgate.quests import QuestDefinitionStore
from questgate.schemas.quest import AccessCondition, QuestDefinition, QuestSubmission
from questgate.schemas.results import VerdictReason, VerdictStatus


PERFECT_TEXT = "Joyful, Happy, Euphoric! aaa"


def make_submission(**overrides) -> QuestSubmission:
    payload = {
        "questId": "quest-1",
        "userId": "user-1",
        "claimedAt": "2023-03-15T10:44:22+0000",
        "accessConditions": [
            {"type": "discordRole", "operator": "contains", "value": "R1"},
            {"type": "level", "operator": "greaterThan", "value": "4"},
        ],
        "userData": {"discordRoles": ["R1", "R2"], "level": 5},
        "submissionText": PERFECT_TEXT,
    }
    payload.update(overrides)
    return QuestSubmission.model_validate(payload)


class TestSubmissionPipeline:
    """Pipeline 테스트"""

    def setup_method(self):
        self.ledger = InMemoryLedger()
        self.pipeline = QuestSubmissionPipeline(ledger=self.ledger, settings=Settings())

    def test_success_records_completion(self):
        """성공 시 완료 기록"""
        verdict = self.pipeline.run(make_submission())

        assert verdict.status == VerdictStatus.SUCCESS
        assert verdict.score == 6
        assert verdict.reason == VerdictReason.SCORED
        assert self.ledger.contains_completed("quest-1")

    def test_replay_rejected(self):
        """완료된 퀘스트 재제출은 fail/0"""
        self.pipeline.run(make_submission())
        verdict = self.pipeline.run(make_submission())

        assert verdict.status == VerdictStatus.FAIL
        assert verdict.score == 0
        assert verdict.reason == VerdictReason.REPLAY

    def test_ineligible_not_scored(self):
        """자격 미달은 점수화 없이 fail/0"""
        submission = make_submission(
            accessConditions=[{"type": "level", "operator": "greaterThan", "value": "10"}]
        )

        verdict = self.pipeline.run(submission)

        assert verdict.status == VerdictStatus.FAIL
        assert verdict.score == 0
        assert verdict.reason == VerdictReason.INELIGIBLE
        assert not self.ledger.contains_completed("quest-1")

    def test_low_score_not_recorded(self):
        """점수 미달은 기록하지 않고 재도전 가능"""
        first = self.pipeline.run(make_submission(submissionText="Lorem ipsum dolor sit amet."))

        assert first.status == VerdictStatus.FAIL
        assert first.score == 1
        assert first.reason == VerdictReason.SCORED
        assert not self.ledger.contains_completed("quest-1")

        second = self.pipeline.run(make_submission())
        assert second.status == VerdictStatus.SUCCESS

    def test_unknown_condition_fails_closed(self):
        """알 수 없는 조건 유형은 자격 미달"""
        submission = make_submission(
            accessConditions=[{"type": "email", "operator": "contains", "value": "x"}]
        )

        verdict = self.pipeline.run(submission)

        assert verdict.reason == VerdictReason.INELIGIBLE
        assert verdict.score == 0

    def test_empty_conditions_scored(self):
        submission = make_submission(accessConditions=[])

        assert self.pipeline.run(submission).status == VerdictStatus.SUCCESS

    def test_legacy_payload(self):
        """구버전 snake_case 필드와 > 연산자"""
        submission = QuestSubmission.model_validate({
            "questId": "quest-legacy",
            "userId": "user-1",
            "claimed_at": "2023-03-15T10:44:22+0000",
            "access_condition": [
                {"type": "discordRole", "operator": "contains", "value": "1163897602547392553"},
                {"type": "date", "value": "2023-02-15T10:44:22+0000", "operator": ">"},
                {"type": "level", "value": "4", "operator": ">"},
            ],
            "user_data": {
                "completed_quests": ["94e2e33e-07e9-4750-8cea-c033d7706057"],
                "discordRoles": ["1163897602547392553", "1194056197100286162"],
                "level": 3,
            },
            "submission_text": PERFECT_TEXT,
        })

        verdict = self.pipeline.run(submission)

        # 레벨 3은 "> 4" 조건 미달
        assert verdict.reason == VerdictReason.INELIGIBLE


class TestConditionResolution:
    """서버 등록 조건 우선 적용"""

    def setup_method(self):
        self.ledger = InMemoryLedger()
        self.store = QuestDefinitionStore([
            QuestDefinition(
                quest_id="registered",
                access_conditions=[
                    AccessCondition(type="level", operator="greaterThan", value="10"),
                ],
            )
        ])

    def test_registered_conditions_override_client(self):
        """클라이언트가 조건을 비워 보내도 서버 조건 적용"""
        pipeline = QuestSubmissionPipeline(self.ledger, self.store, Settings())

        verdict = pipeline.run(make_submission(questId="registered", accessConditions=[]))

        assert verdict.reason == VerdictReason.INELIGIBLE

    def test_unregistered_uses_client_conditions(self):
        pipeline = QuestSubmissionPipeline(self.ledger, self.store, Settings(TRUST_CLIENT_CONDITIONS=True))

        assert pipeline.run(make_submission()).status == VerdictStatus.SUCCESS

    def test_unregistered_rejected_without_trust(self):
        pipeline = QuestSubmissionPipeline(self.ledger, self.store, Settings(TRUST_CLIENT_CONDITIONS=False))

        verdict = pipeline.run(make_submission())

        assert verdict.reason == VerdictReason.INELIGIBLE
        assert not self.ledger.contains_completed("quest-1")


class StaleReadLedger(InMemoryLedger):
    """다른 요청이 먼저 기록한 상황을 재현 (조회 시점에는 미완료로 보임)"""

    def contains_completed(self, quest_id: str) -> bool:
        return False


class TestConcurrentCompletion:
    """동시 제출 경쟁"""

    def test_lost_race_is_replay(self):
        ledger = StaleReadLedger()
        ledger.mark_completed("quest-1")
        pipeline = QuestSubmissionPipeline(ledger=ledger, settings=Settings())

        verdict = pipeline.run(make_submission())

        assert verdict.status == VerdictStatus.FAIL
        assert verdict.score == 0
        assert verdict.reason == VerdictReason.REPLAY


class TestAgentValidation:
    """Agent 검증 실패는 파이프라인 밖으로 전파"""

    def test_empty_text_raises_without_recording(self):
        ledger = InMemoryLedger()
        pipeline = QuestSubmissionPipeline(ledger=ledger, settings=Settings())
        # 스키마 검증을 거치지 않은 제출
        submission = make_submission().model_copy(update={"submission_text": ""})

        with pytest.raises(AgentError):
            pipeline.run(submission)

        assert not ledger.contains_completed("quest-1")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
