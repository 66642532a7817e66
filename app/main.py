import uvicorn
from fastapi import FastAPI

from app.api.routes.health import router as health_router
from app.api.routes.internal_waitlist import router as internal_waitlist_router
from app.api.routes.waitlist import router as waitlist_router
from app.core.config import get_settings
from app.core.logging import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Devconnect Waitlist API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.include_router(health_router)
    app.include_router(waitlist_router)
    app.include_router(internal_waitlist_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
