"""GET/PUT /v1/profile and GET /v1/status - stored profile and its current state"""

import logging
from datetime import datetime
from typing import Callable
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from limite_real.api.v1.schemas import ProfileSchema, StateResponse
from limite_real.api.v1.state import NOT_CONFIGURED_MESSAGE, compute_result, validation_error
from limite_real.api.dependencies import get_clock, get_request_id, profile_lock
from limite_real.infrastructure.database.session import get_db
from limite_real.infrastructure.database.repositories import ProfileRepository
from limite_real.domain.exceptions import ValidationError
from limite_real.domain.ledger import configure_profile

router = APIRouter()


@router.get("/profile", response_model=ProfileSchema)
def get_profile(db: Session = Depends(get_db)):
    """Return the stored profile with today's expense log"""
    profile = ProfileRepository(db).load()
    if profile is None:
        raise HTTPException(status_code=404, detail=NOT_CONFIGURED_MESSAGE)
    return ProfileSchema.from_domain(profile)


@router.put("/profile", response_model=StateResponse)
def put_profile(
    request_body: ProfileSchema,
    request: Request,
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Configure the card, overwriting any previous profile.

    The expense log in the body (usually empty) replaces the stored one.
    """
    request_id = get_request_id(request)

    with profile_lock:
        try:
            profile = configure_profile(
                total_limit=request_body.total_limit,
                month_spend=request_body.month_spend,
                active_installments=request_body.active_installments,
                closing_day=request_body.closing_day,
                todays_expenses=[e.to_domain() for e in request_body.todays_expenses],
            )
        except ValidationError as e:
            raise validation_error(e, request_id)

        result = compute_result(profile, clock(), request_id)
        ProfileRepository(db).save(profile)
        db.commit()

    logging.info("Profile configured", extra={"request_id": request_id, "closing_day": profile.closing_day})

    return StateResponse(configured=True, profile=ProfileSchema.from_domain(profile), result=result)


@router.get("/status", response_model=StateResponse)
def get_status(
    request: Request,
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Current figures for the stored profile, or a hint to configure first"""
    request_id = get_request_id(request)

    profile = ProfileRepository(db).load()
    if profile is None:
        return StateResponse(configured=False, message=NOT_CONFIGURED_MESSAGE)

    try:
        result = compute_result(profile, clock(), request_id)
    except ValidationError as e:
        raise validation_error(e, request_id)

    return StateResponse(configured=True, profile=ProfileSchema.from_domain(profile), result=result)
