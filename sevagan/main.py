from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sevagan.api.routes.router import api_router
from sevagan.core.config import Settings, settings as default_settings
from sevagan.core.errors import SevaganError
from sevagan.services.container import build_services
from sevagan.services.logger import log_debug


async def sevagan_error_handler(request: Request, exc: SevaganError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation failed",
            "code": "ValidationError",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def create_app(settings: Settings = None, **service_overrides) -> FastAPI:
    """Builds an app with its own in-memory stores."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_debug("startup", {"environment": settings.ENVIRONMENT, "prefix": settings.API_PREFIX})
        yield
        # end every open live-feed stream
        app.state.services.broadcaster.close_all()

    app = FastAPI(title="SEVAGAN Backend", lifespan=lifespan)
    app.state.services = build_services(settings, **service_overrides)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(SevaganError, sevagan_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    @app.get("/")
    async def root():
        return {"message": "SEVAGAN backend is running"}

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    # Include API routers
    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
