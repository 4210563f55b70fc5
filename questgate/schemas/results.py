"""
결과 스키마
자격 판정, 점수화, 최종 판정 결과를 정의합니다.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class VerdictStatus(str, Enum):
    """최종 판정 상태"""
    SUCCESS = "success"
    FAIL = "fail"


class VerdictReason(str, Enum):
    """판정 사유 (내부용, 응답에는 포함하지 않음)"""
    REPLAY = "replay"
    INELIGIBLE = "ineligible"
    SCORED = "scored"


class EligibilityResult(BaseModel):
    """
    Eligibility Agent 출력
    조건별 통과/탈락 여부와 탈락 사유를 포함합니다.
    """
    granted: bool
    passed_conditions: list[int] = Field(
        default_factory=list,
        description="통과한 조건 인덱스"
    )
    failed_conditions: list[int] = Field(
        default_factory=list,
        description="탈락한 조건 인덱스"
    )
    failure_reasons: dict[int, str] = Field(
        default_factory=dict,
        description="탈락 사유 (조건 인덱스: 사유)",
        examples=[{0: "레벨 3 <= 기준 4"}]
    )


class ScoreBreakdown(BaseModel):
    """신호별 점수 상세 내역"""
    punctuation: int = Field(default=0, description="구두점 점수")
    positivity: int = Field(default=0, description="긍정 어휘 점수")
    repetition: int = Field(default=0, description="반복 패턴 점수")
    matched_words: list[str] = Field(
        default_factory=list,
        description="점수에 반영된 긍정 어휘"
    )
    denylisted: bool = Field(default=False, description="금칙어 포함 여부")
    denylist_hits: list[str] = Field(default_factory=list)


class ScoreResult(BaseModel):
    """
    Score Agent 출력
    총점과 판정 상태, 신호별 상세 내역입니다.
    """
    model_config = ConfigDict(use_enum_values=True)

    total: int = Field(ge=0, description="총점")
    status: VerdictStatus
    breakdown: ScoreBreakdown


class Verdict(BaseModel):
    """파이프라인 최종 판정"""
    model_config = ConfigDict(use_enum_values=True)

    status: VerdictStatus
    score: int = Field(ge=0)
    reason: VerdictReason

    @classmethod
    def rejected(cls, reason: VerdictReason) -> "Verdict":
        """점수 없이 실패 처리"""
        return cls(status=VerdictStatus.FAIL, score=0, reason=reason)

    def to_response(self) -> "SubmitQuestResponse":
        return SubmitQuestResponse(status=self.status, score=self.score)


class SubmitQuestResponse(BaseModel):
    """제출 응답 (replay/자격 미달/점수 미달 모두 동일한 형태)"""
    model_config = ConfigDict(
        use_enum_values=True,
        json_schema_extra={"example": {"status": "success", "score": 6}},
    )

    status: VerdictStatus
    score: int
