from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
from supplement_advisor.api.dependencies import close_resources, get_lexicon
from supplement_advisor.api.routes import external, reminders, supplements
from supplement_advisor.config.config_loader import CONFIG
from supplement_advisor.core.errors import SupplementAdvisorError
from supplement_advisor.utils.logger_config import PrettyLogger, setup_logger

# 로거 설정
app_logger = PrettyLogger('app')
logger = setup_logger('server')


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작/종료 시 실행되는 이벤트 핸들러"""
    # 시작 시: 성분 사전은 프로세스당 한 번 생성
    lexicon = get_lexicon()
    app_logger.info("애플리케이션 시작", data={"keywords": len(lexicon)}, step="startup")
    yield
    # 종료 시
    app_logger.info("애플리케이션 종료 중", step="shutdown")
    try:
        await close_resources()
        app_logger.info("외부 연결 종료", step="shutdown")
    except Exception as e:
        app_logger.error("외부 연결 종료 중 오류", error=e)


def create_app() -> FastAPI:
    app = FastAPI(title="Supplement Advisor API", lifespan=lifespan)
    prefix = CONFIG.get_api_prefix()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 라우터 등록
    app.include_router(supplements.router, prefix=prefix, tags=["supplements"])
    app.include_router(reminders.router, prefix=prefix, tags=["reminders"])
    app.include_router(external.router, prefix=prefix, tags=["external"])

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """모든 HTTP 요청을 로깅하는 미들웨어."""
        client_ip = request.client.host if request.client else "-"
        logger.info(f"Client IP: {client_ip}, Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code} for {client_ip}")
        return response

    @app.exception_handler(SupplementAdvisorError)
    async def service_error_handler(request: Request, exc: SupplementAdvisorError):
        logger.error(
            f"{request.method} {request.url.path} 처리 실패 - "
            f"타입: {type(exc).__name__}, 상태: {exc.status_code}, 메시지: {exc.message}"
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        logger.warning(f"{request.method} {request.url.path} 요청 검증 실패: {errors}")
        return JSONResponse(
            status_code=400,
            content={"error": "요청 데이터가 올바르지 않습니다.", "details": errors}
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"API 처리 중 에러 발생 - 타입: {type(exc).__name__}")
        logger.error(f"에러 메시지: {str(exc)}")
        logger.error("스택 트레이스:", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "서버 내부 오류가 발생했습니다."}
        )

    @app.get("/")
    def read_root():
        """루트 엔드포인트."""
        return {"status": "supplement-advisor is running"}

    return app


supplement_app = create_app()


if __name__ == "__main__":
    fastapi_config = CONFIG.get_fastapi_settings()
    uvicorn.run(
        app=supplement_app,
        host=fastapi_config.get('server_host', '0.0.0.0'),
        port=fastapi_config.get('server_port', 8000),
        log_level=fastapi_config.get('log_level', 'info')
    )
