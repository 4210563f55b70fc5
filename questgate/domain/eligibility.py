"""
자격 판정 엔진
규칙 기반으로 퀘스트 클레임 자격을 판정합니다.
"""

import re
from typing import Callable, Sequence

from loguru import logger

from questgate.schemas.quest import (
    AccessCondition,
    ConditionOperator,
    ConditionType,
    UserClaimContext,
    parse_timestamp,
)
from questgate.schemas.results import EligibilityResult


CheckFunc = Callable[[AccessCondition, UserClaimContext], tuple[bool, str]]
LEVEL_PATTERN = re.compile(r"[+-]?[0-9]+")


class EligibilityEngine:
    """
    규칙 기반 자격 판정 엔진

    모든 조건을 AND로 결합합니다. 조건이 없으면 통과합니다.
    등록되지 않은 (type, operator) 조합은 탈락 처리됩니다 (fail-closed).
    """

    def __init__(self):
        # 판정 함수 레지스트리: (조건 유형, 연산자) -> 체크함수
        self._checks: dict[tuple[str, str], CheckFunc] = {
            (ConditionType.DISCORD_ROLE.value, ConditionOperator.CONTAINS.value): self._check_role_contains,
            (ConditionType.DISCORD_ROLE.value, ConditionOperator.NOT_CONTAINS.value): self._check_role_not_contains,
            (ConditionType.DATE.value, ConditionOperator.GREATER_THAN.value): self._check_date_after,
            (ConditionType.DATE.value, ConditionOperator.LESS_THAN.value): self._check_date_before,
            (ConditionType.LEVEL.value, ConditionOperator.GREATER_THAN.value): self._check_level_above,
            (ConditionType.LEVEL.value, ConditionOperator.LESS_THAN.value): self._check_level_below,
        }

    def evaluate(
        self,
        conditions: Sequence[AccessCondition],
        context: UserClaimContext,
    ) -> EligibilityResult:
        """
        클레임 컨텍스트로 자격 조건을 판정합니다.

        Args:
            conditions: 자격 조건 목록 (순서 유지)
            context: 클레임 시점 사용자 정보

        Returns:
            EligibilityResult: 판정 결과 (통과 여부, 조건별 근거)
        """
        passed = []
        failed = []
        failure_reasons = {}

        # 모든 조건을 판정해 탈락 사유를 빠짐없이 기록
        for index, condition in enumerate(conditions):
            check_func = self._checks.get((condition.type, condition.operator))

            if check_func is None:
                is_pass = False
                reason = f"지원하지 않는 조건 ({condition.type}, {condition.operator})"
            else:
                is_pass, reason = check_func(condition, context)

            if is_pass:
                passed.append(index)
            else:
                failed.append(index)
                failure_reasons[index] = reason

        result = EligibilityResult(
            granted=not failed,
            passed_conditions=passed,
            failed_conditions=failed,
            failure_reasons=failure_reasons,
        )

        logger.debug(
            f"Eligibility: granted={result.granted} "
            f"({len(passed)} passed, {len(failed)} failed)"
        )
        return result

    def is_eligible(
        self,
        conditions: Sequence[AccessCondition],
        context: UserClaimContext,
    ) -> bool:
        """자격 여부만 반환"""
        return self.evaluate(conditions, context).granted

    # === 개별 판정 함수들 ===

    def _check_role_contains(
        self, condition: AccessCondition, context: UserClaimContext
    ) -> tuple[bool, str]:
        if condition.value in context.discord_roles:
            return True, ""
        return False, f"역할 {condition.value} 없음"

    def _check_role_not_contains(
        self, condition: AccessCondition, context: UserClaimContext
    ) -> tuple[bool, str]:
        if condition.value not in context.discord_roles:
            return True, ""
        return False, f"제외 대상 역할 {condition.value} 보유"

    def _check_date_after(
        self, condition: AccessCondition, context: UserClaimContext
    ) -> tuple[bool, str]:
        try:
            boundary = parse_timestamp(condition.value)
        except ValueError:
            return False, f"날짜 형식 오류: {condition.value!r}"
        if context.claimed_at > boundary:
            return True, ""
        return False, f"클레임 시각 {context.claimed_at.isoformat()} <= 기준 {boundary.isoformat()}"

    def _check_date_before(
        self, condition: AccessCondition, context: UserClaimContext
    ) -> tuple[bool, str]:
        try:
            boundary = parse_timestamp(condition.value)
        except ValueError:
            return False, f"날짜 형식 오류: {condition.value!r}"
        if context.claimed_at < boundary:
            return True, ""
        return False, f"클레임 시각 {context.claimed_at.isoformat()} >= 기준 {boundary.isoformat()}"

    def _check_level_above(
        self, condition: AccessCondition, context: UserClaimContext
    ) -> tuple[bool, str]:
        boundary = self._parse_level(condition.value)
        if boundary is None:
            return False, f"레벨 형식 오류: {condition.value!r}"
        if context.level > boundary:
            return True, ""
        return False, f"레벨 {context.level} <= 기준 {boundary}"

    def _check_level_below(
        self, condition: AccessCondition, context: UserClaimContext
    ) -> tuple[bool, str]:
        boundary = self._parse_level(condition.value)
        if boundary is None:
            return False, f"레벨 형식 오류: {condition.value!r}"
        if context.level < boundary:
            return True, ""
        return False, f"레벨 {context.level} >= 기준 {boundary}"

    @staticmethod
    def _parse_level(value: str) -> int | None:
        # ASCII 정수만 허용 ("4_0", "4.5", 비ASCII 숫자는 형식 오류)
        value = value.strip()
        if not LEVEL_PATTERN.fullmatch(value):
            return None
        return int(value)
