"""FastAPI application for the hotel booking portal REST API.

Serves the agency (hotel administration), hotel staff (dashboard and
bookings) and guests (booking form behind a single-use link).
"""

import os
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from portal_api.exceptions import register_exception_handlers
from portal_api.middleware.correlation import CorrelationIdMiddleware
from portal_api.routes.advisor import router as advisor_router
from portal_api.routes.auth import router as auth_router
from portal_api.routes.bookings import router as bookings_router
from portal_api.routes.guests import router as guests_router
from portal_api.routes.health import API_VERSION
from portal_api.routes.health import router as health_router
from portal_api.routes.hotels import router as hotels_router
from portal_shared.utils.logging import configure_logging

configure_logging()

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"

app = FastAPI(
    title="Hotel Portal API",
    description="REST API for hotel administration, bookings and guest booking links",
    version=API_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)

app.include_router(health_router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(hotels_router, prefix="/api")
app.include_router(bookings_router, prefix="/api")
app.include_router(guests_router, prefix="/api")
app.include_router(advisor_router, prefix="/api")


@app.get("/api/ping")
async def ping() -> dict[str, Any]:
    """Root health check endpoint at /api/ping."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "hotel-portal-api",
    }


# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = True) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 8080)
        reload: Enable hot reload for development (default: True)
    """
    import uvicorn

    if reload:
        # uvicorn needs an import string to reload
        uvicorn.run(
            "portal_api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
