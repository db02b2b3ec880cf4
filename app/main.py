import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1 import branches, employees
from app.core.config import settings
from app.core.logging_setup import configure_logging
from app.core.request_logging import RequestLoggingMiddleware
from app.database.initialize_db import init_db
from app.exceptions.handlers import register_exception_handlers
from app.infrastructure.document_store.memory_store import InMemoryDocumentStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging()
    if settings.DOCUMENT_STORE_BACKEND == "sql":
        init_db()
    logger.info("Application started", extra={"store_backend": settings.DOCUMENT_STORE_BACKEND})
    yield


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.memory_store = InMemoryDocumentStore()
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(branches.router)
    app.include_router(employees.router)
    register_exception_handlers(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=False)
