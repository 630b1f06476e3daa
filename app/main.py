"""
제안서 생성 시스템의 메인 진입점 파일입니다.
웹 서버 애플리케이션을 생성하고 설정하는 역할을 담당합니다.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.api.router import api_router
from app.exceptions import (
    ProposalBuilderError,
    InputValidationError,
    InsufficientCreditsError,
    NotFoundError,
    ParsingError,
    WorkflowError,
)

logger = logging.getLogger(__name__)


def status_code_for(exc: ProposalBuilderError) -> int:
    """커스텀 예외를 HTTP 상태 코드로 변환합니다."""
    if isinstance(exc, InputValidationError):
        return 400
    if isinstance(exc, InsufficientCreditsError):
        return 402
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, WorkflowError):
        return 409
    if isinstance(exc, ParsingError):
        return 502
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션의 생명주기(시작과 종료)를 관리하는 함수입니다.

    서버가 시작될 때 설정을 불러오고 시작 로그를 출력합니다.
    """
    settings = get_settings()
    logger.info(f"제안서 생성기가 다음 주소에서 시작됩니다: {settings.host}:{settings.port}")
    logger.info(f"AI 처리를 위해 {settings.claude_model} 모델을 사용합니다")
    if not settings.anthropic_api_key:
        logger.warning("ANTHROPIC_API_KEY가 설정되지 않았습니다. 분석/편집 요청은 실패합니다")

    yield

    logger.info("제안서 생성기가 종료됩니다")


def create_app() -> FastAPI:
    """
    FastAPI 웹 애플리케이션을 생성하고 설정하는 함수입니다.

    주요 기능:
    1. 기본 앱 정보 설정 (제목, 설명 등)
    2. CORS 설정 (프론트엔드와의 통신 허용 설정)
    3. API 라우터 연결 (기능별 주소 연결)
    """
    settings = get_settings()

    app = FastAPI(
        title="제안서 자동 생성 시스템",
        description="고객 브리프를 분석해 패키지/커스텀 견적 제안서와 SOW를 만드는 AI 파이프라인",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS 미들웨어 설정: 프론트엔드 웹페이지가 이 서버에 접속할 수 있도록 허용
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 글로벌 예외 핸들러: 커스텀 예외를 구조화된 JSON 응답으로 변환
    @app.exception_handler(ProposalBuilderError)
    async def proposal_error_handler(request: Request, exc: ProposalBuilderError):
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error(f"[{exc.error_code}] {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content={
                "error_code": exc.error_code,
                "message": exc.message,
                "details": exc.details,
                "timestamp": datetime.now().isoformat(),
            },
        )

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.error(f"처리되지 않은 예외: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error_code": "ERR_INTERNAL",
                "message": "Internal server error",
                "details": None,
                "timestamp": datetime.now().isoformat(),
            },
        )

    # API 라우터 포함: /api/v1 주소 아래에 모든 기능을 연결합니다.
    app.include_router(api_router, prefix="/api/v1")

    return app


# 애플리케이션 인스턴스 생성
app = create_app()


@app.get("/")
async def root():
    """루트 엔드포인트: 서버의 기본 정보를 반환합니다."""
    return {
        "name": "제안서 자동 생성 시스템",
        "version": "1.0.0",
        "description": "고객 브리프 → 견적 제안서 → SOW",
        "docs": "/docs",
        "api": "/api/v1",
    }


# 이 파일을 직접 실행했을 때 서버를 구동시키는 코드입니다.
if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,  # 코드가 변경되면 자동으로 재시작 (개발 모드)
    )
