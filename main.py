# Essential imports
import time
from fastapi import FastAPI, Request, status, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.orm import sessionmaker

# Import all models so the tables are registered on Base.metadata
import models
from core.database import Base, SessionLocal, engine
from core.exceptions import StorefrontError
from routers import auth, catalog, cart
from services.app_controller import AppController
from services.auth_session import AuthSession
from services.collection_client import SqlCollectionClient

# Rate limiter imports
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from middleware.rate_limiter import limiter

# Logging imports
from core.logging_config import setup_logging, get_logger
from middleware import RequestIDMiddleware, get_request_id
from core.config import settings
from utils.logger import log_request

# CORS imports
from fastapi.middleware.cors import CORSMiddleware

setup_logging(
    log_level=settings.LOG_LEVEL,
    log_dir=settings.LOG_DIR
)

logger = get_logger(__name__)


def build_controller(session_factory: sessionmaker) -> AppController:
    """Wire one shopper session: collection client -> auth session -> controller."""
    client = SqlCollectionClient(session_factory)
    return AppController(AuthSession(client), client, page_size=settings.CATALOG_PAGE_SIZE)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)

    controller = build_controller(SessionLocal)
    app.state.controller = controller
    await controller.start()
    logger.info("Application startup complete", extra={"event": "startup"})

    yield

    controller.close()
    logger.info("Application shutting down", extra={"event": "shutdown"})


app = FastAPI(
    title="Storefront API",
    description="Catalog browsing and shopping cart for the storefront UI",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    controller = getattr(request.app.state, "controller", None)
    user = controller.user if controller is not None else None

    log_request(
        logger,
        request.method,
        request.url.path,
        response.status_code,
        (time.time() - start_time) * 1000,
        user_id=user.id if user is not None else None,
        extra={"client_ip": request.client.host if request.client else "unknown"}
    )

    return response


# Added last so it wraps the logging middleware and the id is set for its records
app.add_middleware(RequestIDMiddleware)


@app.get("/health")
async def health_check():
    logger.debug("Health check requested")
    return {"status": "Healthy"}


@app.exception_handler(StorefrontError)
async def storefront_exception_handler(request: Request, exc: StorefrontError):
    logger.warning(
        f"Request failed: {exc.detail}",
        extra={
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "status_code": exc.status_code
        }
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Log anything unhandled with its stack trace and answer with a generic 500.
    """
    if isinstance(exc, (HTTPException, RequestValidationError)):
        raise

    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "request_id": get_request_id(request)
        },
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


app.include_router(auth.router)
app.include_router(catalog.router)
app.include_router(cart.router)


app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
