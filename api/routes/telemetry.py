"""
Telemetry Endpoints

This module serves the synthetic boiler telemetry consumed by the
dashboard:
- A single "now" sample for live cards
- A fixed 100-point series for trend charts (and as CSV)
- The KPI snapshot with status
- Detail-view summaries and the correlation matrix

Every request is a fresh draw; nothing is stored between calls.
"""

import io
import logging
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from api.models import (
    BoilerSampleModel,
    CorrelationResponse,
    KPIResponse,
    ParameterInfo,
    ParameterSummaryModel,
    SeriesResponse,
    SummaryResponse,
)
from core.kpi import KPIClassifier
from core.statistics import (
    BOILER_PARAMETERS,
    correlation_matrix,
    search_parameters,
    summarize_window,
)
from engine.generator import BoilerDataGenerator, BoilerSeries, write_series_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/telemetry", tags=["Telemetry"])


def _seed_from_env() -> Optional[int]:
    seed = os.getenv("GENERATOR_SEED")
    return int(seed) if seed else None


# Initialize generator
generator = BoilerDataGenerator(random_seed=_seed_from_env())


def get_generator() -> BoilerDataGenerator:
    """Dependency returning the shared generator."""
    return generator


def series_to_response(series: BoilerSeries) -> SeriesResponse:
    return SeriesResponse(
        duration_hours=series.duration_hours,
        spacing_ms=series.spacing_ms,
        points_per_hour=series.points_per_hour,
        point_count=len(series),
        samples=[BoilerSampleModel(**s.to_dict()) for s in series],
    )


# =========================================
# API Endpoints
# =========================================

@router.get(
    "/sample",
    response_model=BoilerSampleModel,
    summary="Get current sample",
    description="Draw one telemetry sample representing now."
)
async def get_sample(gen: BoilerDataGenerator = Depends(get_generator)):
    """Get one fresh sample."""
    return BoilerSampleModel(**gen.generate_sample().to_dict())


@router.get(
    "/series",
    response_model=SeriesResponse,
    summary="Get telemetry series",
    description="""
    Generate a series spanning the requested number of hours.

    The series always has exactly 100 points; the duration only changes
    the spacing between them (`hours * 3,600,000 / 100` ms). Use
    `points_per_hour` to slice a window out of it.
    """
)
async def get_series(
    hours: float = Query(default=24, gt=0, le=8760, description="Span of the series in hours"),
    gen: BoilerDataGenerator = Depends(get_generator)
):
    """Get a 100-point series."""
    return series_to_response(gen.generate_series(hours))


@router.get(
    "/series/export",
    summary="Export telemetry series as CSV",
    response_class=StreamingResponse,
)
async def export_series(
    hours: float = Query(default=24, gt=0, le=8760, description="Span of the series in hours"),
    gen: BoilerDataGenerator = Depends(get_generator)
):
    """Download a series as CSV."""
    series = gen.generate_series(hours)

    buffer = io.StringIO()
    write_series_csv(series, buffer)
    buffer.seek(0)

    filename = f"boiler_series_{hours:g}h.csv"
    logger.info("Exporting %d-point series (%sh) as CSV", len(series), hours)

    return StreamingResponse(
        iter([buffer.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get(
    "/kpi",
    response_model=KPIResponse,
    summary="Get current KPI snapshot",
    description="""
    Draw a fresh sample and classify it.

    **Status rules** (later rules override earlier):
    - optimal by default
    - warning if efficiency < 86% or CO₂ > 820 mg/Nm³
    - critical if efficiency < 84% or CO₂ > 860 mg/Nm³
    """
)
async def get_kpi(gen: BoilerDataGenerator = Depends(get_generator)):
    """Get the current KPI snapshot."""
    snapshot = KPIClassifier(generator=gen).current()
    return KPIResponse(**snapshot.to_dict())


@router.get(
    "/parameters",
    response_model=List[ParameterInfo],
    summary="List parameters",
    description="Display metadata (label, unit, target band, colour) for each parameter."
)
async def list_parameters(
    search: str = Query(default="", description="Case-insensitive label filter")
):
    """List the parameter catalogue."""
    return [ParameterInfo(**p.to_dict()) for p in search_parameters(search)]


@router.get(
    "/summary",
    response_model=SummaryResponse,
    summary="Get parameter summaries",
    description="""
    Generate a `hours`-long series and summarise its trailing
    `window_hours` per parameter (average, max, min, latest, trend).

    The window is cut with the series' points-per-hour, so 24 hours of a
    168-hour series covers the last 14 points.
    """
)
async def get_summary(
    hours: float = Query(default=168, gt=0, le=8760, description="Span of the series in hours"),
    window_hours: Optional[float] = Query(
        default=None, gt=0, description="Trailing window in hours (whole series if omitted)"
    ),
    search: str = Query(default="", description="Case-insensitive label filter"),
    gen: BoilerDataGenerator = Depends(get_generator)
):
    """Get summary statistics of a series window."""
    series = gen.generate_series(hours)
    window = min(window_hours, hours) if window_hours else hours

    specs = {p.key: p for p in BOILER_PARAMETERS}
    summaries = summarize_window(series, window, search)

    return SummaryResponse(
        duration_hours=hours,
        window_hours=window,
        point_count=len(series.last_hours(window)),
        parameters=[
            ParameterSummaryModel(
                label=specs[s.key].label,
                unit=specs[s.key].unit,
                target=specs[s.key].target,
                **s.to_dict()
            )
            for s in summaries
        ]
    )


@router.get(
    "/correlation",
    response_model=CorrelationResponse,
    summary="Get parameter correlation matrix",
    description="Pearson correlation between parameters over a freshly generated series."
)
async def get_correlation(
    hours: float = Query(default=24, gt=0, le=8760, description="Span of the series in hours"),
    gen: BoilerDataGenerator = Depends(get_generator)
):
    """Get the correlation heat map data."""
    series = gen.generate_series(hours)
    keys = [p.key for p in BOILER_PARAMETERS]

    return CorrelationResponse(
        duration_hours=hours,
        keys=keys,
        matrix=correlation_matrix(list(series), keys),
    )
