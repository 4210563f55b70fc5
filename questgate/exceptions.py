"""
QuestGate 예외 정의
"""


class QuestGateError(Exception):
    """QuestGate 기본 예외"""
    pass


class LedgerError(QuestGateError):
    """완료 기록 저장소 읽기/쓰기 실패"""
    pass


class QuestDefinitionError(QuestGateError):
    """퀘스트 정의 파일 로드 실패"""
    pass


class AgentError(QuestGateError):
    """Agent 입력/출력 검증 실패"""
    pass
