import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from core import db, settings
from core.errors import install_error_handlers
from core.logging import configure_logging
from entries import router as entries_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # One pool per process; a failing schema script aborts startup.
    pool = await db.create_pool()
    try:
        await db.run_script(pool, db.read_schema_script())
    except db.StartupError:
        await db.close_pool(pool)
        raise
    app.state.pool = pool
    try:
        yield
    finally:
        app.state.pool = None
        await db.close_pool(pool)


def create_app() -> FastAPI:
    app = FastAPI(title="blog-entries-api", lifespan=lifespan)
    install_error_handlers(app)
    app.include_router(entries_router.router, tags=["entries"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    configure_logging()
    host, port = settings.api_host(), settings.api_port()
    logger.info("listening host=%s port=%s", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    run()
