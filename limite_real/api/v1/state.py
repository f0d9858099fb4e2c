"""Shared helpers for endpoints that compute and return profile state"""

import time
import logging
from datetime import datetime
from fastapi import HTTPException

from limite_real.api.v1.schemas import CalculationResponse
from limite_real.domain.engine import calculate
from limite_real.domain.exceptions import ValidationError
from limite_real.domain.models import FinancialProfile
from limite_real.infrastructure.observability.metrics import record_calculation, validation_failure_counter
from limite_real.infrastructure.observability.logging import log_calculation

NOT_CONFIGURED_MESSAGE = "Profile not configured yet. Configure your card to start."


def compute_result(profile: FinancialProfile, now: datetime, request_id: str) -> CalculationResponse:
    """Run the engine, record metrics and logs, and convert to the response schema"""
    start_time = time.time()
    result = calculate(profile, now)

    duration_ms = (time.time() - start_time) * 1000
    record_calculation(result.status, result.available_today)
    log_calculation(request_id, result.status.value, result.days_remaining, result.available_today, duration_ms)

    return CalculationResponse.from_domain(result)


def validation_error(exc: ValidationError, request_id: str) -> HTTPException:
    """Translate an engine validation error into HTTP 400"""
    validation_failure_counter.labels(kind=exc.kind).inc()
    logging.warning(f"Validation failed: {exc.kind}: {exc.message}", extra={"request_id": request_id})
    return HTTPException(status_code=400, detail={"kind": exc.kind, "message": exc.message})


def not_configured_error() -> HTTPException:
    return HTTPException(status_code=409, detail=NOT_CONFIGURED_MESSAGE)
