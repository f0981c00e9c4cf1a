"""FastAPI application entrypoint. No business logic; only wiring, middleware and error handlers."""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from app.api.v1 import router as api_router
from app.core.config import Settings, get_settings
from app.core.database import create_db_engine, create_session_factory

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body: dict[str, str] = {"detail": "Internal server error"}
        # Leaks store/driver messages to the client; keep EXPOSE_ERROR_DETAILS off in prod.
        if settings.EXPOSE_ERROR_DETAILS:
            body["error"] = str(exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def create_app(engine: Engine | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Build the application and its connection pool.

    The engine (and the session factory bound to it) lives on ``app.state``; pass one
    in to run against another database, e.g. SQLite in tests.
    """
    settings = settings or get_settings()
    if settings.uses_default_jwt_secret:
        logger.warning(
            "JWT_SECRET is the built-in default; tokens can be forged. Set JWT_SECRET."
        )

    app = FastAPI(
        title="Feria Admin API",
        version=settings.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.engine = engine if engine is not None else create_db_engine(settings)
    app.state.session_factory = create_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
    )
    _register_error_handlers(app, settings)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict:
        """Welcome payload with server identity."""
        return {
            "message": "Feria Admin API",
            "version": settings.VERSION,
            "serverInfo": {
                "ip": settings.SERVER_IP,
                "time": datetime.now(UTC).isoformat(),
                "environment": settings.APP_ENV,
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=get_settings().PORT)
