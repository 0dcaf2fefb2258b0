from fastapi.middleware.cors import CORSMiddleware
from taskboard.routers.auth import router as auth_router
from taskboard.routers.boards import router as board_router
from taskboard.routers.lists import router as list_router
from taskboard.routers.cards import router as card_router

from fastapi import Request, FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
import logging
from contextlib import asynccontextmanager
from .config import get_settings
from .database import init_db
from .errors import TaskBoardError, ErrorKind
from .schemas.common import Health
from .utils.time import get_time_stamp

# Logger
logger = logging.getLogger("uvicorn.error")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup."""
    init_db()
    logger.info("Database ready")

    yield


# App instance
app = FastAPI(title=settings.app_name, lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Domain errors keep their kind and message all the way to the client
@app.exception_handler(TaskBoardError)
async def taskboard_error_handler(request: Request, exc: TaskBoardError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url}: {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.url}: {exc.message}")
    headers = None
    if exc.kind is ErrorKind.unauthenticated:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind.value},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid payload on {request.url}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid request payload",
            "kind": ErrorKind.validation.value,
            "errors": jsonable_encoder(exc.errors()),
        },
    )


# Custom HTTP exception handler
@app.exception_handler(HTTPException)
async def custom_http_exception_handler(request: Request, exc: HTTPException):
    logger.error(f"HTTPException on {request.url}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Server error", "kind": ErrorKind.internal.value},
    )


# API routers
prefix = settings.api_prefix


@app.get(f"{prefix}/health", response_model=Health, tags=["Health"])
async def health():
    return Health(status="OK", timestamp=get_time_stamp())


app.include_router(auth_router, prefix=prefix)
app.include_router(board_router, prefix=prefix)
app.include_router(list_router, prefix=prefix)
app.include_router(card_router, prefix=prefix)
