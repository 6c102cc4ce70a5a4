"""HTTP 入口（FastAPI）。

- POST /chat        一轮聊天，上游失败时仍返回 200 与替代文案
- GET  /chat        健康检查
- GET  /chat/roles  可选角色列表
"""

from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from diet_companion.api import service
from diet_companion.config.settings import settings
from diet_companion.domain.exceptions import InternalError, InvalidInput
from diet_companion.flows.runner import ChatOrchestrator
from diet_companion.infrastructure.logging.logger import logger


def get_orchestrator(request: Request) -> ChatOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    return orchestrator or service.get_default_orchestrator()


def create_app(orchestrator: Optional[ChatOrchestrator] = None) -> FastAPI:
    app = FastAPI(title="Weight Loss Assistant Chat API")
    app.state.orchestrator = orchestrator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.post("/chat")
    def chat(
        payload: Any = Body(default=None),
        orch: ChatOrchestrator = Depends(get_orchestrator),
    ):
        if not isinstance(payload, dict):
            return JSONResponse(status_code=400, content={"error": "Invalid request body"})
        try:
            return service.run_chat(
                orch,
                payload.get("message"),
                payload.get("conversationHistory", []),
                payload.get("role"),
            )
        except InvalidInput as e:
            return JSONResponse(status_code=e.http_status, content={"error": e.message})
        except Exception as e:
            err = e if isinstance(e, InternalError) else InternalError(code="INTERNAL_ERROR", message=str(e))
            logger.exception("chat.internal_error", extra={"extra": {"code": err.code, "error": err.message}})
            content = {"success": False, "error": "Failed to process chat request"}
            if settings.is_development:
                content["details"] = err.message
            return JSONResponse(status_code=err.http_status, content=content)

    @app.get("/chat")
    def health(orch: ChatOrchestrator = Depends(get_orchestrator)):
        return service.health_status(orch)

    @app.get("/chat/roles")
    def roles():
        return {"roles": service.list_roles()}

    return app


app = create_app()
