from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from staffdesk.api.routes import router as api_router
from staffdesk.config import get_settings
from staffdesk.core.engine import CRMEngine, build_engine


def create_app(engine: CRMEngine | None = None) -> FastAPI:
    settings = engine.settings if engine is not None else get_settings()

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.engine = engine if engine is not None else build_engine(settings)

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(api_router)
    return app
