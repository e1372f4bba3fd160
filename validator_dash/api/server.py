import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from validator_dash import db
from validator_dash.config import get_settings
from validator_dash.logging_config import configure_logging

from .routes import stats_router, transactions_router, validators_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if settings.database_url:
        db.init_pool(settings)
    else:
        logger.warning("DATABASE_URL is not set; database-backed routes will fail")
    try:
        yield
    finally:
        db.close_pool()


def create_app() -> FastAPI:
    app = FastAPI(title="Validator Dashboard API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    app.include_router(validators_router)
    app.include_router(transactions_router)
    app.include_router(stats_router)

    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run("validator_dash.api.server:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
