from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from books import router as books_router
from books.repository import BookRepository
from core import db
from core.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Initialize the DB pool once per process; any failure aborts startup.
    try:
        await db.init_pool()
    except db.ConfigurationError as exc:
        logger.error("Invalid database configuration: {}", exc)
        raise
    try:
        app.state.book_repository = BookRepository(db.query_runner())
        yield
    finally:
        app.state.book_repository = None
        await db.close_pool()


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error."})


def create_app() -> FastAPI:
    app = FastAPI(
        title="books-api",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(books_router.router, tags=["books"])
    return app


app = create_app()
