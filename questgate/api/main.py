"""
QuestGate FastAPI 메인

실행:
    uvicorn questgate.api.main:app --port 3000
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from questgate import __version__
from questgate.config import Settings, settings as default_settings
from questgate.ledger import CompletionLedger, create_ledger
from questgate.logging_config import setup_logging
from questgate.pipeline import QuestSubmissionPipeline
from questgate.quests import QuestDefinitionStore, create_quest_store
from questgate.api.routes import router


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """필수 필드 누락/형식 오류는 400으로 응답"""
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "All fields are required", "details": details},
    )


def create_app(
    settings: Settings | None = None,
    ledger: CompletionLedger | None = None,
    quest_store: QuestDefinitionStore | None = None,
) -> FastAPI:
    """
    앱 생성

    ledger/quest_store를 주입하지 않으면 설정값으로 생성합니다.
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="QuestGate",
        description="퀘스트 제출물 자격 판정 및 점수화 서비스",
        version=__version__,
    )

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # 프로덕션에서는 제한 필요
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)

    if ledger is None:
        ledger = create_ledger(settings)
    if quest_store is None:
        quest_store = create_quest_store(settings)
    app.state.ledger = ledger
    app.state.pipeline = QuestSubmissionPipeline(
        ledger=ledger,
        quest_store=quest_store,
        settings=settings,
    )

    # 라우터 등록
    app.include_router(router)

    @app.get("/")
    async def root():
        """헬스 체크"""
        return {
            "name": "QuestGate",
            "status": "running",
            "version": __version__,
        }

    @app.get("/health")
    async def health():
        """상세 헬스 체크"""
        return {
            "status": "healthy",
            "ledger_backend": app.state.ledger.name,
            "completed_quests": len(app.state.ledger),
            "quest_definitions": len(quest_store),
        }

    return app


app = create_app()
