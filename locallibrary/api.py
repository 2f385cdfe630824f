import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from locallibrary import __version__
from locallibrary.catalog import Catalog
from locallibrary.config import settings
from locallibrary.templating import STATIC_DIR, redirect, render
from locallibrary.views import authors, bookinstances, books, genres, get_catalog

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open the default catalog unless one was supplied to create_app()
    if getattr(app.state, "catalog", None) is None:
        app.state.catalog = Catalog()
    logger.info(
        f"{settings.app_name} started ({settings.environment}) with database {app.state.catalog.db_file}"
    )
    yield
    logger.info(f"{settings.app_name} stopped")


def create_app(catalog: Optional[Catalog] = None) -> FastAPI:
    """Build the web application, optionally around an existing catalog."""
    configure_logging()

    app = FastAPI(title=settings.app_name, version=__version__, debug=settings.debug, lifespan=lifespan)
    app.state.catalog = catalog

    # --- Security headers ---
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    # --- Error handling ---
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.info(f"{request.method} {request.url.path}: {exc.status_code} {exc.detail}")
        return render(request, "error.html", status_code=exc.status_code,
                      title="Error", message=exc.detail, status=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Only path parameters are declared, so a malformed id is an unknown page
        logger.info(f"{request.method} {request.url.path}: malformed path parameter")
        return render(request, "error.html", status_code=404,
                      title="Error", message="Page not found", status=404)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return render(request, "error.html", status_code=500,
                      title="Error", message="Internal Server Error", status=500)

    @app.get("/", include_in_schema=False)
    def root():
        return redirect("/catalog/")

    @app.get("/health")
    def health(request: Request):
        """Lightweight health check with a quick database query."""
        db_ok = True
        try:
            get_catalog(request).count_books()
        except Exception:
            db_ok = False
        return {
            "status": "healthy" if db_ok else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "db": db_ok,
        }

    app.include_router(books.router)
    app.include_router(authors.router)
    app.include_router(genres.router)
    app.include_router(bookinstances.router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return app


app = create_app()
