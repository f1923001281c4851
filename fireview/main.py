"""FastAPI application entry point: `uvicorn fireview.main:app`.

Wiring only. The console session is built by the lifespan
(fireview.core.lifespan); errors are shaped by
fireview.core.exception_handlers.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from slowapi.errors import RateLimitExceeded

from fireview.api.v1 import api_router
from fireview.core.config import Settings, get_settings
from fireview.core.exception_handlers import register_exception_handlers
from fireview.core.lifespan import create_lifespan
from fireview.core.limiter import limiter
from fireview.middleware import RequestIDMiddleware
from fireview.pages import render_root_page


def _rate_limited(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={
            "error": "RATE_LIMITED",
            "message": f"Too many requests: {exc.detail}. Try again shortly.",
            "details": {},
        },
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app. Settings default to get_settings() at call time."""
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limited)
    register_exception_handlers(app)

    # Last added runs first: request ID wraps CORS so preflights are logged too.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")

    page = render_root_page(settings.app_name, settings.import_max_bytes)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def console_page() -> HTMLResponse:
        return HTMLResponse(content=page, headers={"Cache-Control": "no-store"})

    return app


app = create_app()
