"""FastAPI entry point for the curriculum assistant service."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import get_settings
from models.errors import ErrorCode, format_error
from services.anthropic_service import get_llm_service
from services.concurrency import ConcurrencyLimitMiddleware
from services.content_store import get_content_store
from services.google_docs import get_google_docs_client
from services.middleware import RequestIdLogFilter, RequestIdMiddleware

logger = logging.getLogger(__name__)

settings = get_settings()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


def configure_logging() -> None:
    root = logging.getLogger()
    if any(isinstance(f, RequestIdLogFilter) for h in root.handlers for f in h.filters):
        return
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdLogFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if settings.debug else logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle — start/stop shared resources."""
    configure_logging()

    # Build the catalogue up front so an inconsistent dataset fails the boot.
    get_content_store()

    docs_client = get_google_docs_client()
    await docs_client.start()

    if not settings.anthropic_api_key:
        logger.warning("ANTHROPIC_API_KEY is not set — chat requests will fail")

    yield

    await get_llm_service().close()
    await docs_client.close()


app = FastAPI(
    title="Curriculum Assistant",
    description="Curriculum chat assistant with Anthropic tool use and streamed artifacts",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Middleware stack (outermost first) ─────────────────────────
# Order matters: CORS → RequestId → ConcurrencyLimit → route handler
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(ConcurrencyLimitMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get ``400 {"error": ...}``."""
    problems = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body") or "body"
        problems.append(f"{loc}: {err.get('msg', 'invalid')}")
    detail = "; ".join(problems) or "invalid request body"
    return JSONResponse(
        status_code=400,
        content={"error": format_error(ErrorCode.INVALID_REQUEST, detail)},
    )


# ── Register routers ────────────────────────────────────────
from api.chat import router as chat_router  # noqa: E402
from api.curriculum import router as curriculum_router  # noqa: E402
from api.health import router as health_router  # noqa: E402

app.include_router(health_router)
app.include_router(curriculum_router)
app.include_router(chat_router)


if __name__ == "__main__":
    if settings.debug:
        # Development: single worker with reload
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.service_port,
            reload=True,
        )
    else:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.service_port,
            workers=4,
            timeout_keep_alive=120,
        )
