from dotenv import load_dotenv
load_dotenv()

import time
import uuid
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from api.v1.blueprint import router as v1_blueprint_router
from core.logging_config import LogContext, get_logger, setup_logging
from core.settings import settings
from services.bootstrap import bootstrap

setup_logging()
logger = get_logger(__name__)


def filter_sentry_event(event, hint):
    """Drop health checks; tag the rest with their request id"""
    if "/health" in event.get("transaction", ""):
        return None

    request_id = event.get("request", {}).get("headers", {}).get("x-request-id")
    if request_id:
        event.setdefault("tags", {})["request_id"] = request_id
    return event


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            StarletteIntegration(transaction_style="endpoint"),
        ],
        traces_sample_rate=0.1,
        attach_stacktrace=True,
        send_default_pii=False,
        before_send=filter_sentry_event,
        auto_enabling_integrations=False,
    )
    logger.info_ctx("Sentry error tracking enabled", environment=settings.SENTRY_ENVIRONMENT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema modules register their schemas here; both registries are read-only afterwards
    bootstrap(settings)
    logger.info_ctx(f"{settings.APP_NAME} ready", api_prefix=settings.API_PREFIX)
    yield
    logger.info(f"{settings.APP_NAME} shutting down")


app = FastAPI(title=settings.APP_NAME, version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Give every request an id and log its outcome with that id bound"""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    if settings.SENTRY_DSN:
        sentry_sdk.set_tag("request_id", request_id)

    if request.url.path == "/health":
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    started = time.perf_counter()
    with LogContext(request_id=request_id, method=request.method, path=request.url.path):
        response = await call_next(request)
        duration = round(time.perf_counter() - started, 3)

        summary = f"{request.method} {request.url.path} -> {response.status_code}"
        if response.status_code >= 500:
            logger.error_ctx(summary, status_code=response.status_code, duration=duration)
        elif response.status_code >= 400:
            logger.warning_ctx(summary, status_code=response.status_code, duration=duration)
        else:
            logger.info_ctx(summary, status_code=response.status_code, duration=duration)

    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", "unknown")

    with LogContext(request_id=request_id, error_type=type(exc).__name__):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "request_id": request_id},
    )


app.include_router(v1_blueprint_router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "arc-blueprint"}
