from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from laundry.api.error_handlers import register_exception_handlers
from laundry.api.v1.router import router as api_v1_router
from laundry.config.settings import Settings, settings
from laundry.core.middleware import register_middlewares
from laundry.core.security import JWTManager
from laundry.services import Controller

WELCOME_MESSAGE = "Welcome to the LaundryAPI"


def create_app(
    config: Optional[Settings] = None,
    controller: Optional[Controller] = None,
    init_schema: Optional[bool] = None,
) -> FastAPI:
    """
    Application factory for the FastAPI app.
    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    config = config or settings
    app = FastAPI(
        title=config.APP_NAME,
        debug=config.DEBUG,
        version=config.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.settings = config
    app.state.controller = controller or Controller.create(config)
    app.state.jwt_manager = JWTManager(
        config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
        access_token_expire_minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=config.API_V1_STR)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def welcome() -> str:
        return WELCOME_MESSAGE

    if init_schema is None:
        init_schema = not config.is_production()

    @app.on_event("startup")
    async def on_startup() -> None:
        from laundry.config.logging import setup_logging
        setup_logging(config)
        if init_schema:
            # For dev/demo only; production schemas are migrated
            from laundry.config.database import get_engine, get_session_factory
            from laundry.db.init_db import init_db, seed_pass_schedule
            init_db(get_engine())
            seed_pass_schedule(get_session_factory(), config)

    return app


app = create_app()
