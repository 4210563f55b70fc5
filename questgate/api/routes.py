"""
QuestGate API 라우터
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger

from questgate.schemas.quest import QuestSubmission
from questgate.schemas.results import SubmitQuestResponse
from questgate.pipeline import QuestSubmissionPipeline

router = APIRouter()


def get_pipeline(request: Request) -> QuestSubmissionPipeline:
    """앱에 등록된 파이프라인 반환"""
    return request.app.state.pipeline


@router.post("/submit-quest", response_model=SubmitQuestResponse)
async def submit_quest(
    submission: QuestSubmission,
    pipeline: QuestSubmissionPipeline = Depends(get_pipeline),
) -> SubmitQuestResponse:
    """
    퀘스트 제출 검증

    - 이미 완료된 퀘스트는 fail/0
    - 자격 조건 미달은 fail/0
    - 그 외에는 제출 텍스트 점수와 판정 결과 반환 (success 시 완료 기록)
    """
    try:
        verdict = pipeline.run(submission)
    except Exception as e:
        logger.error(f"Submission failed for {submission.quest_id}: {e}")
        raise HTTPException(status_code=500, detail=f"제출 처리 중 오류 발생: {str(e)}")

    return verdict.to_response()


@router.get("/schema/submission")
async def get_submission_schema():
    """제출 요청 스키마 조회"""
    return QuestSubmission.model_json_schema()
