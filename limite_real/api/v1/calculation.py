"""POST /v1/calculate - stateless real-limit calculation"""

from datetime import datetime
from typing import Callable
from fastapi import APIRouter, Depends, Request

from limite_real.api.v1.schemas import ProfileSchema, CalculationResponse
from limite_real.api.v1.state import compute_result, validation_error
from limite_real.api.dependencies import get_clock, get_request_id
from limite_real.domain.exceptions import ValidationError

router = APIRouter()


@router.post("/calculate", response_model=CalculationResponse)
def calculate_limit(
    request_body: ProfileSchema,
    request: Request,
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Compute today's figures for the given profile without storing anything.

    Returns:
        Real limit, days to closing, daily allowance, available today and status
    """
    request_id = get_request_id(request)
    try:
        return compute_result(request_body.to_domain(), clock(), request_id)
    except ValidationError as e:
        raise validation_error(e, request_id)
