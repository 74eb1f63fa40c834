"""
Main application module for the slicekit backend.

This file sets up the FastAPI application, configures CORS so browser
clients can make cross-origin requests and exposes a simple health
check endpoint.

Routers for the slicing and perimeter APIs are included under the
`/api` namespace.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes_perimeter import router as perimeter_router
from .api.routes_slicing import router as slicing_router


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(title="slicekit")

    # Allow all origins by default.  In production you should restrict
    # this to the domains that are allowed to access your API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(slicing_router, prefix="/api", tags=["slicing"])
    app.include_router(perimeter_router, prefix="/api", tags=["perimeter"])

    return app


# Uvicorn imports this when running `uvicorn slicekit.main:app` from
# within the backend directory.
app = create_app()
