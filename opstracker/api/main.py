"""FastAPI application exposing the operations tracker JSON API."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from opstracker.config import CONFIG
from opstracker.errors import AuthenticationRequired, OpsTrackerError
from opstracker.logger import configure_logging

from .routes import billing, business, daily_logs, dashboard, financials, pipeline, scripts, webhooks


configure_logging(CONFIG.log_level)

app = FastAPI(
    title=CONFIG.api_title,
    version=CONFIG.api_version,
    description=(
        "JSON API for the operations tracker web client. "
        "Authenticate using a Clerk session JWT in the Authorization header."
    ),
)


def _configure_cors(api_app: FastAPI) -> None:
    origins = list(CONFIG.api_cors_origins)
    if not origins:
        return

    api_app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


_configure_cors(app)


@app.exception_handler(OpsTrackerError)
async def handle_domain_error(request: Request, exc: OpsTrackerError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationRequired) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


@app.get("/health", tags=["health"])
def healthcheck() -> dict[str, str]:
    """Liveness probe; touches neither Supabase nor the broker."""

    return {"status": "ok"}


_ROUTERS = (
    (business.router, "business"),
    (daily_logs.router, "daily-logs"),
    (pipeline.router, "pipeline"),
    (financials.router, "financials"),
    (scripts.router, "scripts"),
    (dashboard.router, "dashboard"),
    (billing.router, "billing"),
    (webhooks.router, "webhooks"),
)

for router, tag in _ROUTERS:
    app.include_router(router, prefix="/v1", tags=[tag])
