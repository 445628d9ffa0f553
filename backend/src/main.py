import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import auth.infrastructure.models  # noqa: F401
import documents.infrastructure.models  # noqa: F401
import sharing.infrastructure.models  # noqa: F401
from auth.application.services import seed_admin
from auth.interfaces.admin_routes import router as admin_router
from auth.interfaces.routes import router as auth_router
from documents.interfaces.node_routes import router as nodes_router
from documents.interfaces.routes import router as documents_router
from shared.config import settings
from shared.exceptions import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DeadlineExceededError,
    NotFoundError,
    ValidationError,
)
from shared.infrastructure.database import Base, async_session, engine
from shared.infrastructure.unit_of_work import DbUnitOfWork
from sharing.interfaces.routes import router as sharing_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_SCHEMA:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema up to date")

    async with async_session() as session:
        await seed_admin(DbUnitOfWork(session), settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)

    logger.info("Application startup complete")
    yield
    await engine.dispose()


app = FastAPI(
    title="DocVault",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Accept", "Authorization", "Content-Type"],
    expose_headers=["X-Request-ID"],
)

app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(documents_router)
app.include_router(nodes_router)
app.include_router(sharing_router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = uuid.uuid4().hex[:8]
    start = time.perf_counter()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        user_id = getattr(request.state, "user_id", None)
        logger.info(
            f"[{request_id}] {request.method} {request.url.path} | status={status} "
            f"latency={(time.perf_counter() - start) * 1000:.0f}ms "
            f"user={str(user_id)[:8] if user_id else '-'}"
        )


@app.exception_handler(ValidationError)
async def validation_handler(request, exc: ValidationError):
    content = {"detail": exc.message}
    if exc.fields:
        content["fields"] = exc.fields
    return JSONResponse(status_code=400, content=content)


@app.exception_handler(NotFoundError)
async def not_found_handler(request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(ConflictError)
async def conflict_handler(request, exc: ConflictError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(AuthenticationError)
async def auth_error_handler(request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"detail": exc.message})


@app.exception_handler(AuthorizationError)
async def forbidden_handler(request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(DeadlineExceededError)
async def deadline_handler(request, exc: DeadlineExceededError):
    return JSONResponse(status_code=504, content={"detail": exc.message})


@app.exception_handler(AppError)
async def app_error_handler(request, exc: AppError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.get("/health")
async def health_check():
    return {"status": "ok"}
