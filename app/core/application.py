from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import NoReturn

import httpx
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from kink import di, inject
from starlette.middleware.trustedhost import TrustedHostMiddleware

from app.api.v1 import v1_router
from app.core.config import Configuration
from app.core.logging import get_logger, setup_logging
from app.infrastructure.observability import configure_observability

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, NoReturn]:
    """Application lifespan manager."""
    setup_logging()

    # a previous lifespan closed the shared client
    if httpx.AsyncClient in di and di[httpx.AsyncClient].is_closed:
        from app.core.container import wire_geolocation  # noqa: PLC0415

        wire_geolocation()

    try:
        yield

    finally:
        if httpx.AsyncClient in di:
            await di[httpx.AsyncClient].aclose()


@inject
def get_application(config: Configuration) -> FastAPI:
    """Get FastAPI application.

    Add new versions:
        app_v2 = _v2(config)
        ...
        main.mount("/api/v2", app_v2)
    """
    v1_app = _v1(config)

    main = FastAPI(lifespan=lifespan)
    main.add_middleware(TrustedHostMiddleware, allowed_hosts=config.api.allowed_hosts)
    main.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    main.mount(config.api.prefix, v1_app)

    return main


def _v1(config: Configuration) -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        debug=config.app_debug,
        description=config.app_description,
        docs_url='/docs' if config.app_environment != 'prod' else None,
        openapi_url='/docs/openapi.json' if config.app_environment != 'prod' else None,
        redoc_url=None,
        title=config.app_name,
        version=config.app_version,
    )

    configure_observability(app, config)
    _register_exception_handlers(app)

    app.include_router(v1_router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.bind(event='validation').warning(
            f'Validation error at {request.url.path}: {len(exc.errors())} error(s)'
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                'detail': 'Invalid or missing request fields',
                'errors': jsonable_encoder(exc.errors(), exclude={'ctx', 'input'}),
            },
        )
