"""
QuestGate Agent 패키지
각 Agent는 단일 책임을 가지며, 정해진 입출력 스키마를 따릅니다.
"""

from .base import BaseAgent
from .eligibility_agent import EligibilityAgent, EligibilityInput
from .score_agent import ScoreAgent

__all__ = [
    "BaseAgent",
    "EligibilityAgent",
    "EligibilityInput",
    "ScoreAgent",
]
