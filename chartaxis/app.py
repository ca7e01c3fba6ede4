"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import configure_logging, settings
from .models import HealthResponse
from .routers import axis, downsample

configure_logging(settings.log_level)

# Create FastAPI app
app = FastAPI(
    title="Chart Axis API",
    description="Axis bounds, label alignment and downsampling for chart rendering",
    version=__version__,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(downsample.router, prefix="/downsample", tags=["downsample"])
app.include_router(axis.router, prefix="/axis", tags=["axis"])


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint pointing at the docs."""
    return {"message": "Chart Axis API - visit /docs for API documentation"}


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)
