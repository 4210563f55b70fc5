"""
QuestGate
퀘스트 제출물 검증 서비스 (자격 조건 판정 + 제출물 점수화)
"""

__version__ = "0.1.0"
