"""
Boiler Cofiring Monitor - FastAPI Application

This is the main entry point for the FastAPI backend.
It combines all route modules and provides system-wide endpoints.

Features:
- Synthetic boiler telemetry (live samples and 100-point series)
- KPI status classification
- Model predictions and operating recommendations
- Operator control panel with range-guarded setpoints
- Interactive API documentation (Swagger/OpenAPI)

Access Points:
- API Root: http://localhost:8000
- Swagger Docs: http://localhost:8000/docs
- ReDoc: http://localhost:8000/redoc
- OpenAPI JSON: http://localhost:8000/openapi.json
"""

import os
import logging
from datetime import datetime
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import __version__
from api.routes import auth_router, operator_router, recommendations_router, telemetry_router
from api.routes.operator import get_console
from api.routes.telemetry import get_generator
from core.operator import OperatorConsole
from engine.generator import BoilerDataGenerator
from api.models import SystemHealth

# =========================================
# Logging Configuration
# =========================================

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def debug_enabled() -> bool:
    return os.getenv("DEBUG", "false").lower() == "true"


# =========================================
# Application Lifespan
# =========================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown.
    """
    logger.info("🚀 Starting Boiler Cofiring Monitor API...")

    seed = os.getenv("GENERATOR_SEED")
    if seed:
        logger.info(f"   Telemetry generator seeded with {seed}")

    logger.info("✅ Boiler Cofiring Monitor API started successfully")
    logger.info("📚 API Documentation: http://localhost:8000/docs")

    yield  # Application runs here

    logger.info("👋 Shutting down Boiler Cofiring Monitor API...")


# =========================================
# FastAPI Application
# =========================================

app = FastAPI(
    title="Boiler Cofiring Monitor API",
    description="""
## Coal/Biomass Cofiring Boiler Monitor

This API backs a monitoring dashboard for a 400 MW coal-fired boiler
cofiring up to 5% biomass.

### Key Features

- **Synthetic Telemetry**: Live samples around the design operating point and
  100-point series spanning any number of hours
- **KPI Status**: Every sample is classified optimal, warning or critical from
  its efficiency and CO₂ emission
- **Recommendations**: Predictions of three offline models (ANN, RSM, LightGBM)
  turned into operating recommendations
- **Operator Panel**: Range-guarded setpoints, alarm acknowledgement and an
  activity log

### Core Concepts

#### KPI Status
- **Warning**: efficiency below 86% or CO₂ above 820 mg/Nm³
- **Critical**: efficiency below 84% or CO₂ above 860 mg/Nm³

#### Series Windows
A series always holds 100 points. A 168-hour series has ~0.6 points per hour,
so its last 24 hours are its last 14 points.

### Quick Start

1. **Check API health**: `GET /health`
2. **Current KPI**: `GET /api/v1/telemetry/kpi`
3. **Weekly trend**: `GET /api/v1/telemetry/series?hours=168`
4. **Recommendations**: `GET /api/v1/recommendations?model=LightGBM`
    """,
    version=__version__,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT"
    },
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# =========================================
# CORS Middleware
# =========================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:8501",  # Streamlit
        "http://127.0.0.1:8501",
        "*"  # Allow all for development - restrict in production
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================
# Exception Handlers
# =========================================

@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "message": "An unexpected error occurred",
            "detail": str(exc) if debug_enabled() else None,
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# =========================================
# Include Routers
# =========================================

# API v1 routes
app.include_router(telemetry_router, prefix="/api/v1")
app.include_router(recommendations_router, prefix="/api/v1")
app.include_router(operator_router, prefix="/api/v1")
app.include_router(auth_router, prefix="/api/v1")


# =========================================
# Root Endpoints
# =========================================

@app.get(
    "/",
    tags=["System"],
    summary="API Root",
    description="Welcome endpoint with API information"
)
async def root():
    """API root endpoint."""
    return {
        "name": "Boiler Cofiring Monitor API",
        "version": __version__,
        "description": "Monitoring and recommendations for a coal/biomass cofiring boiler",
        "documentation": "/docs",
        "health_check": "/health",
        "api_base": "/api/v1"
    }


@app.get(
    "/health",
    response_model=SystemHealth,
    tags=["System"],
    summary="System Health Check",
    description="Check the health status of the API and its components"
)
async def health_check(
    generator: BoilerDataGenerator = Depends(get_generator),
    console: OperatorConsole = Depends(get_console)
):
    """System health check endpoint."""
    # Presence only, must not consume the generator's random stream
    components = {
        "api": "ok",
        "telemetry_generator": "ok" if generator is not None else "error",
        "operator_console": "ok" if console is not None else "error",
    }

    overall_status = "ok" if all(v == "ok" for v in components.values()) else "degraded"

    return SystemHealth(
        status=overall_status,
        version=__version__,
        timestamp=datetime.utcnow(),
        components=components
    )


@app.get(
    "/info",
    tags=["System"],
    summary="System Information",
    description="Get detailed system information"
)
async def system_info():
    """Get system information."""
    return {
        "api": {
            "name": "Boiler Cofiring Monitor API",
            "version": __version__,
            "environment": os.getenv("ENVIRONMENT", "development")
        },
        "plant": {
            "rated_load_mw": 400,
            "max_cofiring_ratio_pct": 5.0,
            "series_points": 100
        },
        "features": {
            "synthetic_telemetry": True,
            "kpi_status": True,
            "recommendations": True,
            "operator_controls": True,
            "persistence": False
        },
        "endpoints": {
            "telemetry": "/api/v1/telemetry",
            "recommendations": "/api/v1/recommendations",
            "operator": "/api/v1/operator/state",
            "login": "/api/v1/auth/login"
        },
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc",
            "openapi": "/openapi.json"
        }
    }


@app.get(
    "/live",
    tags=["System"],
    summary="Liveness Check",
    description="Check if the API process is alive"
)
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}


# =========================================
# Development/Debug Endpoints
# =========================================

if debug_enabled():

    @app.get("/debug/config", tags=["Debug"])
    async def debug_config():
        """Show configuration (debug only)."""
        return {
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "generator_seed": os.getenv("GENERATOR_SEED", "not set"),
            "environment": os.getenv("ENVIRONMENT", "development"),
            "debug": os.getenv("DEBUG", "false")
        }


# =========================================
# Run with Uvicorn (for development)
# =========================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", 8000)),
        reload=os.getenv("API_RELOAD", "true").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )
