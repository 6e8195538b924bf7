"""
Transform router for stateless workout step conversion.

This router contains endpoints for:
- /transform/flatten - Garmin step tree -> flat planning steps
- /transform/rebuild - flat planning steps -> Garmin step tree
- /transform/validate - strict validation of planning workouts
- /transform/activities - raw Garmin activities -> slim activity summaries

Nothing here talks to Garmin; the endpoints only run the codec.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, ValidationError

from domain.converters import flatten_and_merge, rebuild_steps, transform_activities
from domain.models import dump_wire_steps
from domain.services.step_validator import validate_workouts

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/transform",
    tags=["Transform"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class StepsPayload(BaseModel):
    """A list of steps, in Garmin or planning format depending on the endpoint."""
    steps: List[Dict[str, Any]]


class WorkoutsPayload(BaseModel):
    """Planning workouts to validate."""
    workouts: List[Any] = Field(..., description="Planning workouts as in a plan file")


class ActivitiesPayload(BaseModel):
    """Raw Garmin activities (list entries, optionally merged with details)."""
    activities: List[Dict[str, Any]]


class ValidationReport(BaseModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)


def _error_detail(error: ValidationError) -> List[Dict[str, Any]]:
    return [{"loc": list(err["loc"]), "msg": err["msg"]} for err in error.errors()]


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/flatten")
def flatten(p: StepsPayload):
    """Flatten Garmin ``workoutSteps`` into planning steps with rest merged in."""
    try:
        plan_steps = flatten_and_merge(p.steps)
    except ValidationError as e:
        logger.warning(f"Rejected malformed wire steps: {e.error_count()} error(s)")
        raise HTTPException(status_code=422, detail=_error_detail(e)) from e
    return {"steps": [step.to_plan_dict() for step in plan_steps]}


@router.post("/rebuild")
def rebuild(p: StepsPayload):
    """Rebuild Garmin ``workoutSteps`` from planning steps.

    Unknown step type, end condition or target keys are encoded with their
    default ids rather than rejected; call /transform/validate first for a
    strict check.
    """
    try:
        wire_steps = rebuild_steps(p.steps)
    except ValidationError as e:
        logger.warning(f"Rejected malformed planning steps: {e.error_count()} error(s)")
        raise HTTPException(status_code=422, detail=_error_detail(e)) from e
    return {"steps": dump_wire_steps(wire_steps)}


@router.post("/validate", response_model=ValidationReport)
def validate(p: WorkoutsPayload):
    """Validate planning workouts, reporting every problem at once."""
    errors = validate_workouts(p.workouts)
    return ValidationReport(valid=not errors, errors=errors)


@router.post("/activities")
def summarize_activities(p: ActivitiesPayload):
    """Summarize raw Garmin activities for weekly planning."""
    try:
        summaries = transform_activities(p.activities)
    except ValidationError as e:
        logger.warning(f"Rejected malformed activities: {e.error_count()} error(s)")
        raise HTTPException(status_code=422, detail=_error_detail(e)) from e
    return {"activities": [summary.to_plan_dict() for summary in summaries]}
