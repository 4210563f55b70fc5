"""
퀘스트 제출 스키마
제출 요청 본문과 자격 조건, 사용자 클레임 정보를 구조화합니다.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from dateutil.parser import isoparse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ConditionType(str, Enum):
    """자격 조건 유형"""
    DISCORD_ROLE = "discordRole"
    DATE = "date"
    LEVEL = "level"


class ConditionOperator(str, Enum):
    """자격 조건 연산자"""
    CONTAINS = "contains"
    NOT_CONTAINS = "notContains"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"


# 구버전 클라이언트가 보내는 연산자 표기
LEGACY_OPERATORS = {
    ">": ConditionOperator.GREATER_THAN.value,
    "<": ConditionOperator.LESS_THAN.value,
}


def parse_timestamp(value: str) -> datetime:
    """
    ISO-8601 문자열을 timezone-aware datetime으로 변환합니다.

    오프셋이 없는 값은 UTC로 간주합니다.

    Raises:
        ValueError: 파싱 불가능한 문자열
    """
    try:
        parsed = isoparse(value.strip())
    except (ValueError, OverflowError) as e:
        # 형식은 맞지만 표현 범위를 벗어난 값 (예: 9999-12-31T24:00:00)
        raise ValueError(f"invalid timestamp: {value!r} ({e})") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class AccessCondition(BaseModel):
    """
    자격 조건

    type/operator는 알 수 없는 값도 그대로 받습니다.
    판정 단계에서 알 수 없는 조합은 탈락 처리됩니다.
    """
    model_config = ConfigDict(frozen=True)

    type: str = Field(description="조건 유형", examples=["discordRole"])
    operator: str = Field(description="연산자", examples=["contains"])
    value: str = Field(description="비교 값", examples=["1163897602547392553"])

    @field_validator("operator", mode="before")
    @classmethod
    def _normalize_operator(cls, v: Any) -> Any:
        if isinstance(v, str):
            return LEGACY_OPERATORS.get(v.strip(), v)
        return v

    @field_validator("value", mode="before")
    @classmethod
    def _stringify_value(cls, v: Any) -> Any:
        # level 조건 값을 숫자로 보내는 클라이언트 대응
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class UserData(BaseModel):
    """클레임 시점의 사용자 정보"""
    model_config = ConfigDict(populate_by_name=True)

    discord_roles: list[str] = Field(
        validation_alias=AliasChoices("discordRoles", "discord_roles"),
        serialization_alias="discordRoles",
        description="보유한 디스코드 역할 ID 목록",
    )
    level: int = Field(description="사용자 레벨")
    # 판정에는 사용하지 않음
    completed_quests: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("completedQuests", "completed_quests"),
        serialization_alias="completedQuests",
        description="사용자가 완료한 퀘스트 ID 목록",
    )


class UserClaimContext(BaseModel):
    """자격 조건 판정에 사용하는 클레임 컨텍스트"""
    model_config = ConfigDict(frozen=True)

    discord_roles: frozenset[str] = frozenset()
    level: int
    claimed_at: datetime


class QuestSubmission(BaseModel):
    """
    퀘스트 제출 요청

    모든 필드가 필수입니다. camelCase가 기본 표기이며,
    구버전 snake_case 필드명도 허용합니다.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "questId": "4569bee2-8f42-4054-b432-68f6ddbc20b5",
                "userId": "cb413e98-44a4-4bb1-aaa1-0b91ab1707e7",
                "claimedAt": "2023-03-15T10:44:22+0000",
                "accessConditions": [
                    {"type": "discordRole", "operator": "contains", "value": "1163897602547392553"},
                    {"type": "date", "operator": "greaterThan", "value": "2023-02-15T10:44:22+0000"},
                    {"type": "level", "operator": "greaterThan", "value": "2"},
                ],
                "userData": {
                    "completedQuests": ["94e2e33e-07e9-4750-8cea-c033d7706057"],
                    "discordRoles": ["1163897602547392553", "1194056197100286162"],
                    "level": 3,
                },
                "submissionText": "Joyful, Happy, Euphoric! aaa",
            }
        },
    )

    quest_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("questId", "quest_id"),
        serialization_alias="questId",
    )
    user_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("userId", "user_id"),
        serialization_alias="userId",
    )
    claimed_at: datetime = Field(
        validation_alias=AliasChoices("claimedAt", "claimed_at"),
        serialization_alias="claimedAt",
        description="클레임 시각 (ISO-8601)",
    )
    access_conditions: list[AccessCondition] = Field(
        validation_alias=AliasChoices(
            "accessConditions", "access_conditions", "access_condition"
        ),
        serialization_alias="accessConditions",
    )
    user_data: UserData = Field(
        validation_alias=AliasChoices("userData", "user_data"),
        serialization_alias="userData",
    )
    submission_text: str = Field(
        min_length=1,
        validation_alias=AliasChoices("submissionText", "submission_text"),
        serialization_alias="submissionText",
    )

    @field_validator("claimed_at", mode="before")
    @classmethod
    def _parse_claimed_at(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_timestamp(v)
        if isinstance(v, datetime) and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def to_context(self) -> UserClaimContext:
        """판정용 클레임 컨텍스트 생성"""
        return UserClaimContext(
            discord_roles=frozenset(self.user_data.discord_roles),
            level=self.user_data.level,
            claimed_at=self.claimed_at,
        )


class QuestDefinition(BaseModel):
    """
    서버에 등록된 퀘스트 정의
    등록된 퀘스트는 요청 본문 대신 이 조건으로 판정합니다.
    """
    model_config = ConfigDict(populate_by_name=True)

    quest_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("questId", "quest_id"),
        serialization_alias="questId",
    )
    title: Optional[str] = None
    access_conditions: list[AccessCondition] = Field(
        default_factory=list,
        validation_alias=AliasChoices("accessConditions", "access_conditions"),
        serialization_alias="accessConditions",
    )
