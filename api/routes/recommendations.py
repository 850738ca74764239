"""
Recommendation Endpoints

Serves the offline model predictions and the recommendation cards built
from them. The prediction rows are fixtures; no model runs at request
time.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from api.models import (
    ErrorResponse,
    PredictionModel,
    RecommendationModel,
    RecommendationsResponse,
)
from engine.fixtures import FixtureLibrary, MLPrediction, ModelType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


def resolve_model(name: Optional[str]) -> MLPrediction:
    """
    Find the prediction for a model name (case-insensitive).

    The most accurate model is used when no name is given.
    """
    if not name:
        return FixtureLibrary.best_prediction()

    for model in ModelType:
        if model.value.lower() == name.lower():
            return FixtureLibrary.get_prediction(model)

    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Unknown model '{name}'. Available: {[m.value for m in ModelType]}"
    )


@router.get(
    "/predictions",
    response_model=List[PredictionModel],
    summary="List model predictions",
    description="Optimisation results of the ANN, RSM and LightGBM models."
)
async def list_predictions():
    """List all model predictions."""
    return [PredictionModel(**p.to_dict()) for p in FixtureLibrary.ml_predictions()]


@router.get(
    "/best",
    response_model=PredictionModel,
    summary="Get the most accurate prediction"
)
async def get_best_prediction():
    """Get the prediction with the highest accuracy."""
    return PredictionModel(**FixtureLibrary.best_prediction().to_dict())


@router.get(
    "",
    response_model=RecommendationsResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown model"}},
    summary="Get recommendations",
    description="""
    Build the recommendation cards for one model.

    Impacts are measured against the reference operating point of
    87% efficiency and 800 mg/Nm³ CO₂. Defaults to the most accurate model.
    """
)
async def get_recommendations(
    model: Optional[str] = Query(default=None, description="ANN, RSM or LightGBM")
):
    """Get recommendation cards for a model."""
    prediction = resolve_model(model)
    logger.debug("Building recommendations for %s", prediction.model.value)

    return RecommendationsResponse(
        prediction=PredictionModel(**prediction.to_dict()),
        recommendations=[
            RecommendationModel(**r.to_dict())
            for r in FixtureLibrary.recommendations(prediction)
        ]
    )
