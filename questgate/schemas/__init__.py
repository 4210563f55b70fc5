"""
QuestGate 스키마 패키지
요청/응답 및 각 Agent의 입출력 스키마를 정의합니다.
"""

from .quest import (
    AccessCondition,
    ConditionOperator,
    ConditionType,
    QuestDefinition,
    QuestSubmission,
    UserClaimContext,
    UserData,
    parse_timestamp,
)
from .results import (
    EligibilityResult,
    ScoreBreakdown,
    ScoreResult,
    SubmitQuestResponse,
    Verdict,
    VerdictReason,
    VerdictStatus,
)

__all__ = [
    "AccessCondition",
    "ConditionOperator",
    "ConditionType",
    "QuestDefinition",
    "QuestSubmission",
    "UserClaimContext",
    "UserData",
    "parse_timestamp",
    "EligibilityResult",
    "ScoreBreakdown",
    "ScoreResult",
    "SubmitQuestResponse",
    "Verdict",
    "VerdictReason",
    "VerdictStatus",
]
