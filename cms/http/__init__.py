"""
CMS HTTP Server

FastAPI app exposing editor auth and content CRUD for newsletters,
blogs and case studies.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cms import __version__
from cms.configs.runtime import get_full_config
from cms.http.api import router as api_router
from cms.http.errors import register_error_handlers


def create_app(allowed_origins: Optional[list[str]] = None) -> FastAPI:
    """Build the FastAPI app with CORS, error handlers and routers."""
    if allowed_origins is None:
        allowed_origins = get_full_config()["allowed_origins"]

    app = FastAPI(
        title="CMS Server",
        description="Content backend for newsletters, blogs and case studies",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/health")
    def health() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


def run_server(host: str = "0.0.0.0", port: int = 5000):
    """Run the FastAPI server. The app is built here so it sees the config at startup."""
    import uvicorn
    from cms.configs import get_logger
    logger = get_logger("http")
    logger.info(f"Starting HTTP server on {host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="warning")
