#!/usr/bin/env python
"""
QuestGate 완료 기록 관리 CLI

사용법:
    python scripts/ledger_cli.py status            # 완료 기록 상태 확인
    python scripts/ledger_cli.py list              # 완료된 퀘스트 목록
    python scripts/ledger_cli.py clear             # 전체 완료 기록 삭제
    python scripts/ledger_cli.py score "텍스트"     # 제출 텍스트 점수 확인

완료 기록 파일 위치는 LEDGER_PATH 설정을 따릅니다.
"""

import sys
from pathlib import Path

# 프로젝트 루트를 path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from questgate.config import settings
from questgate.domain.scoring import ScoringEngine
from questgate.exceptions import LedgerError
from questgate.ledger import FileLedger


def cmd_status():
    """완료 기록 상태 간단히 출력"""
    ledger = FileLedger(settings.LEDGER_PATH)
    stats = ledger.get_stats()

    print("=" * 40)
    print("📦 QuestGate 완료 기록 상태")
    print("=" * 40)
    print(f"  완료된 퀘스트: {stats['count']}개")
    print(f"  총 용량: {stats['size_kb']}KB")
    print(f"  파일 위치: {stats['path']}")
    print("=" * 40)


def cmd_list():
    """완료된 퀘스트 목록 출력"""
    ledger = FileLedger(settings.LEDGER_PATH)
    quest_ids = ledger.completed_ids()

    if not quest_ids:
        print("  (완료 기록 없음)")
        return

    print(f"{'퀘스트 ID':<40} {'완료 시각':<32}")
    print("-" * 72)
    for quest_id in quest_ids:
        print(f"{quest_id:<40} {ledger.completed_at(quest_id) or '-':<32}")


def cmd_clear():
    """전체 완료 기록 삭제"""
    ledger = FileLedger(settings.LEDGER_PATH)
    count = ledger.clear()
    print(f"🗑️  완료 기록 {count}개 삭제됨")


def cmd_score(text: str):
    """제출 텍스트 점수 확인 (기록은 변경하지 않음)"""
    engine = ScoringEngine()
    result = engine.score(text)
    breakdown = result.breakdown

    print(f"  구두점: +{breakdown.punctuation}")
    print(f"  긍정 어휘: +{breakdown.positivity} {breakdown.matched_words}")
    print(f"  반복 패턴: +{breakdown.repetition}")
    if breakdown.denylisted:
        print(f"  ⛔ 금칙어 포함 {breakdown.denylist_hits} → 0점")
    print(f"  총점: {result.total} / {engine.max_score} ({result.status})")


def print_help():
    """도움말 출력"""
    print(__doc__)


def main():
    if len(sys.argv) < 2:
        print_help()
        return

    command = sys.argv[1].lower()

    try:
        if command == "status":
            cmd_status()
        elif command == "list":
            cmd_list()
        elif command == "clear":
            cmd_clear()
        elif command == "score":
            if len(sys.argv) < 3:
                print("❌ 점수를 확인할 텍스트를 입력하세요.")
                return
            cmd_score(sys.argv[2])
        elif command in ["help", "-h", "--help"]:
            print_help()
        else:
            print(f"❌ 알 수 없는 명령: {command}")
            print_help()
    except LedgerError as e:
        print(f"❌ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
