"""
QuestGate 도메인 로직 패키지
규칙 기반 자격 판정과 제출물 점수화 로직을 담당합니다.
I/O나 저장소는 이 레이어에 관여하지 않습니다.
"""

from .eligibility import EligibilityEngine
from .scoring import ScoringEngine

__all__ = ["EligibilityEngine", "ScoringEngine"]
