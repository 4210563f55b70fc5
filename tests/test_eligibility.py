"""
QuestGate 테스트 - Eligibility Engine
"""

import pytest
import sys
sys.path.insert(0, ".")

from datetime import datetime, timezone

from questgate.domain.eligibility import EligibilityEngine
from questgate.schemas.quest import AccessCondition, UserClaimContext


def condition(type_: str, operator: str, value: str) -> AccessCondition:
    return AccessCondition(type=type_, operator=operator, value=value)


class TestEligibilityEngine:
    """Eligibility Engine 테스트"""

    def setup_method(self):
        self.engine = EligibilityEngine()

        # 기본 클레임 컨텍스트
        self.context = UserClaimContext(
            discord_roles=frozenset({"R1", "R2"}),
            level=5,
            claimed_at=datetime(2023, 3, 15, 10, 44, 22, tzinfo=timezone.utc),
        )

    def test_empty_conditions_granted(self):
        """조건이 없으면 통과"""
        result = self.engine.evaluate([], self.context)

        assert result.granted is True
        assert result.failed_conditions == []

    def test_role_and_level_granted(self):
        """역할 + 레벨 조건 모두 통과"""
        conditions = [
            condition("discordRole", "contains", "R1"),
            condition("level", "greaterThan", "4"),
        ]

        result = self.engine.evaluate(conditions, self.context)

        assert result.granted is True
        assert result.passed_conditions == [0, 1]

    def test_level_too_low(self):
        """레벨 미달로 탈락"""
        conditions = [condition("level", "greaterThan", "10")]

        assert self.engine.is_eligible(conditions, self.context) is False

    def test_level_less_than(self):
        """레벨 상한"""
        assert self.engine.is_eligible([condition("level", "lessThan", "6")], self.context)
        assert not self.engine.is_eligible([condition("level", "lessThan", "5")], self.context)

    def test_level_boundary_is_strict(self):
        """같은 레벨은 greaterThan 탈락"""
        assert not self.engine.is_eligible([condition("level", "greaterThan", "5")], self.context)

    def test_role_missing(self):
        """필요 역할 없음"""
        result = self.engine.evaluate([condition("discordRole", "contains", "R9")], self.context)

        assert result.granted is False
        assert "R9" in result.failure_reasons[0]

    def test_role_not_contains(self):
        """제외 역할"""
        assert self.engine.is_eligible([condition("discordRole", "notContains", "R9")], self.context)
        assert not self.engine.is_eligible([condition("discordRole", "notContains", "R2")], self.context)

    def test_date_after(self):
        """기준일 이후 클레임"""
        conditions = [condition("date", "greaterThan", "2023-02-15T10:44:22+0000")]

        assert self.engine.is_eligible(conditions, self.context)

    def test_date_before(self):
        """기준일 이전이어야 하는데 이후 클레임"""
        conditions = [condition("date", "lessThan", "2023-02-15T10:44:22+0000")]

        assert not self.engine.is_eligible(conditions, self.context)

    def test_date_equal_fails_both_ways(self):
        """같은 시각은 양쪽 모두 탈락"""
        value = "2023-03-15T10:44:22+00:00"

        assert not self.engine.is_eligible([condition("date", "greaterThan", value)], self.context)
        assert not self.engine.is_eligible([condition("date", "lessThan", value)], self.context)

    def test_date_without_offset_is_utc(self):
        """오프셋 없는 날짜는 UTC로 비교"""
        assert self.engine.is_eligible([condition("date", "lessThan", "2023-03-16")], self.context)
        assert self.engine.is_eligible([condition("date", "greaterThan", "2023-03-15")], self.context)

    def test_legacy_operator(self):
        """구버전 > / < 연산자"""
        assert self.engine.is_eligible([condition("level", ">", "4")], self.context)
        assert not self.engine.is_eligible([condition("level", "<", "4")], self.context)


class TestEligibilityFailClosed:
    """알 수 없는 조건은 탈락 처리"""

    def setup_method(self):
        self.engine = EligibilityEngine()
        self.context = UserClaimContext(
            discord_roles=frozenset({"R1"}),
            level=50,
            claimed_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        self.passing = condition("discordRole", "contains", "R1")

    @pytest.mark.parametrize("bad", [
        ("email", "contains", "x"),
        ("discordRole", "greaterThan", "R1"),
        ("level", "contains", "5"),
        ("date", "notContains", "2020-01-01"),
        ("level", "equals", "50"),
    ])
    def test_unsupported_combination(self, bad):
        """지원하지 않는 (type, operator) 조합"""
        result = self.engine.evaluate([self.passing, condition(*bad)], self.context)

        assert result.granted is False
        assert result.failed_conditions == [1]
        assert 1 in result.failure_reasons

    def test_invalid_level_value(self):
        """숫자가 아닌 레벨 값"""
        assert not self.engine.is_eligible([condition("level", "lessThan", "ten")], self.context)

    def test_invalid_date_value(self):
        """파싱 불가능한 날짜"""
        assert not self.engine.is_eligible([condition("date", "greaterThan", "yesterday")], self.context)

    def test_out_of_range_date_value(self):
        """표현 범위를 벗어난 날짜"""
        assert not self.engine.is_eligible([condition("date", "lessThan", "9999-12-31T24:00:00")], self.context)

    @pytest.mark.parametrize("value", ["4_0", "\u0664", "4.5", "", "4 0"])
    def test_level_value_must_be_ascii_integer(self, value):
        """ASCII 정수가 아닌 레벨 값은 탈락"""
        assert not self.engine.is_eligible([condition("level", "lessThan", value)], self.context)
        assert not self.engine.is_eligible([condition("level", "greaterThan", value)], self.context)

    def test_signed_level_value(self):
        assert self.engine.is_eligible([condition("level", "greaterThan", "+4")], self.context)
        assert self.engine.is_eligible([condition("level", "greaterThan", "-1")], self.context)

    def test_all_failures_reported(self):
        """모든 조건의 탈락 사유 기록"""
        conditions = [
            condition("level", "greaterThan", "100"),
            self.passing,
            condition("discordRole", "contains", "R7"),
        ]

        result = self.engine.evaluate(conditions, self.context)

        assert result.failed_conditions == [0, 2]
        assert result.passed_conditions == [1]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
