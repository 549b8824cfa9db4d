"""
FastAPI application entry point.

Mounts the signal board and forwards user intents to it.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from signalboard.core.config import settings
from signalboard.core.logging import setup_logging
from signalboard.services.board import SignalBoard

# Setup logging
setup_logging()

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Signal tables with search, sort, sector grouping and pivot lookups",
    debug=settings.DEBUG,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup() -> None:
    """Mount the board and fetch the initial snapshots."""
    if getattr(app.state, "board", None) is None:
        app.state.board = SignalBoard.from_settings(settings)
    await app.state.board.load()


@app.on_event("shutdown")
async def shutdown() -> None:
    """Drop responses still in flight."""
    board = getattr(app.state, "board", None)
    if board is not None:
        board.dispose()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


from signalboard.api.tables import router as tables_router
from signalboard.api.sectors import router as sectors_router
from signalboard.api.details import router as details_router

app.include_router(tables_router, prefix="/api/v1/tables", tags=["tables"])
app.include_router(sectors_router, prefix="/api/v1/sectors", tags=["sectors"])
app.include_router(details_router, prefix="/api/v1/details", tags=["details"])
