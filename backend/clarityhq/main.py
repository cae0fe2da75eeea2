"""Main FastAPI application for the ClarityHQ backend."""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from clarityhq.api.routes.focus import router as focus_router
from clarityhq.api.routes.focus_sessions import router as focus_sessions_router
from clarityhq.api.routes.rewrite import router as rewrite_router
from clarityhq.api.routes.task import router as task_router
from clarityhq.core.config import settings
from clarityhq.core.logging import configure_logging
from clarityhq.core.middleware import RequestIDMiddleware
from clarityhq.observability.client import init_opik
from clarityhq.observability.tracing import trace

configure_logging(log_level=settings.log_level, debug=settings.debug)

app = FastAPI(title=settings.app_name, version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-Id"],
)
app.add_middleware(RequestIDMiddleware)
app.include_router(focus_router)
app.include_router(focus_sessions_router)
app.include_router(task_router)
app.include_router(rewrite_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
