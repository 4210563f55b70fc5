"""
점수화 엔진
규칙 기반으로 제출 텍스트 점수를 산정합니다.
"""

import re
from typing import Optional, Sequence

from loguru import logger

from questgate.config import settings
from questgate.schemas.results import ScoreBreakdown, ScoreResult, VerdictStatus


# 구두점 , . ? ! 중 하나라도 포함
PUNCTUATION_PATTERN = re.compile(r"[,.?!]")
# 같은 1글자 또는 2글자 단위가 3회 이상 연속
REPETITION_PATTERN = re.compile(r"(.)\1{2,}|(..)\2{2,}", re.DOTALL)


def normalize_terms(terms: Sequence[str]) -> list[str]:
    """빈 문자열 제거, 중복 제거 (처음 순서 유지)"""
    return [term for term in dict.fromkeys(terms) if term]


class ScoringEngine:
    """
    규칙 기반 점수화 엔진

    신호별 점수를 고정된 순서로 합산합니다.
    - 구두점: +1
    - 긍정 어휘: 단어당 +1 (최대 positivity_cap)
    - 반복 패턴: +2
    금칙어가 포함되면 합산 결과와 무관하게 0점입니다.
    """

    PUNCTUATION_POINTS = 1
    REPETITION_POINTS = 2

    def __init__(
        self,
        positive_vocabulary: Optional[Sequence[str]] = None,
        denylist: Optional[Sequence[str]] = None,
        success_threshold: Optional[int] = None,
        positivity_cap: Optional[int] = None,
    ):
        self.positive_vocabulary = normalize_terms(
            settings.POSITIVE_VOCABULARY if positive_vocabulary is None else positive_vocabulary
        )
        self.denylist = normalize_terms(settings.DENYLIST if denylist is None else denylist)
        self.success_threshold = (
            settings.SUCCESS_THRESHOLD if success_threshold is None else success_threshold
        )
        self.positivity_cap = (
            settings.POSITIVITY_CAP if positivity_cap is None else positivity_cap
        )

    @property
    def max_score(self) -> int:
        return self.PUNCTUATION_POINTS + self.positivity_cap + self.REPETITION_POINTS

    def score(self, text: str) -> ScoreResult:
        """
        제출 텍스트 점수를 산정합니다.

        Args:
            text: 제출 텍스트

        Returns:
            ScoreResult: 총점, 판정 상태, 신호별 상세 내역
        """
        breakdown = ScoreBreakdown()

        # 1. 구두점
        if PUNCTUATION_PATTERN.search(text):
            breakdown.punctuation = self.PUNCTUATION_POINTS

        # 2. 긍정 어휘 (어휘 목록 순서, 단어당 1회)
        for word in self.positive_vocabulary:
            if word in text and len(breakdown.matched_words) < self.positivity_cap:
                breakdown.matched_words.append(word)
        breakdown.positivity = len(breakdown.matched_words)

        # 3. 반복 패턴
        if REPETITION_PATTERN.search(text):
            breakdown.repetition = self.REPETITION_POINTS

        total = breakdown.punctuation + breakdown.positivity + breakdown.repetition

        # 4. 금칙어 (합산 후 적용)
        breakdown.denylist_hits = [term for term in self.denylist if term in text]
        if breakdown.denylist_hits:
            breakdown.denylisted = True
            total = 0

        result = ScoreResult(
            total=total,
            status=self.verdict_status(total),
            breakdown=breakdown,
        )

        logger.debug(f"Score: {total} ({result.status})")
        return result

    def compute_score(self, text: str) -> int:
        """총점만 반환"""
        return self.score(text).total

    def verdict_status(self, score: int) -> VerdictStatus:
        """점수 기준으로 성공/실패 판정"""
        if score >= self.success_threshold:
            return VerdictStatus.SUCCESS
        return VerdictStatus.FAIL
