"""POST/DELETE /v1/expenses and POST /v1/period/reset - expense log mutations"""

import logging
from datetime import datetime
from typing import Callable
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from limite_real.api.v1.schemas import ExpenseRequest, ExpenseResponse, ExpenseSchema, ProfileSchema, StateResponse
from limite_real.api.v1.state import compute_result, not_configured_error
from limite_real.api.dependencies import get_clock, get_request_id, profile_lock
from limite_real.infrastructure.database.session import get_db
from limite_real.infrastructure.database.repositories import ProfileRepository
from limite_real.infrastructure.observability.metrics import expense_counter, period_reset_counter
from limite_real.domain.exceptions import ExpenseNotFoundError
from limite_real.domain.ledger import record_expense, remove_expense, reset_period

router = APIRouter()


@router.post("/expenses", response_model=ExpenseResponse)
def create_expense(
    request_body: ExpenseRequest,
    request: Request,
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Record an expense made today.

    Flow:
    1. Load stored profile (409 if not configured)
    2. Append expense to today's log
    3. Persist and recompute today's figures
    """
    request_id = get_request_id(request)
    now = clock()

    with profile_lock:
        repo = ProfileRepository(db)
        profile = repo.load()
        if profile is None:
            raise not_configured_error()

        profile, expense = record_expense(profile, request_body.amount, now)
        repo.save(profile)
        db.commit()

    expense_counter.labels(action="recorded").inc()
    logging.info("Expense recorded", extra={"request_id": request_id, "expense_id": expense.expense_id})

    return ExpenseResponse(
        expense=ExpenseSchema.from_domain(expense),
        profile=ProfileSchema.from_domain(profile),
        result=compute_result(profile, now, request_id),
    )


@router.delete("/expenses/{expense_id}", response_model=StateResponse)
def delete_expense(
    expense_id: str,
    request: Request,
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Remove a single expense from today's log (undo)"""
    request_id = get_request_id(request)

    with profile_lock:
        repo = ProfileRepository(db)
        profile = repo.load()
        if profile is None:
            raise not_configured_error()

        try:
            profile = remove_expense(profile, expense_id)
        except ExpenseNotFoundError:
            raise HTTPException(status_code=404, detail="Expense not found")

        repo.save(profile)
        db.commit()

    expense_counter.labels(action="removed").inc()
    logging.info("Expense removed", extra={"request_id": request_id, "expense_id": expense_id})

    return StateResponse(
        configured=True,
        profile=ProfileSchema.from_domain(profile),
        result=compute_result(profile, clock(), request_id),
    )


@router.post("/period/reset", response_model=StateResponse)
def reset_month(
    request: Request,
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Start a new statement period: zero month spend and clear the expense log"""
    request_id = get_request_id(request)

    with profile_lock:
        repo = ProfileRepository(db)
        profile = repo.load()
        if profile is None:
            raise not_configured_error()

        profile = reset_period(profile)
        repo.save(profile)
        db.commit()

    period_reset_counter.inc()
    logging.info("Period reset", extra={"request_id": request_id})

    return StateResponse(
        configured=True,
        profile=ProfileSchema.from_domain(profile),
        result=compute_result(profile, clock(), request_id),
    )
