"""Profile state transitions - configure, record/remove expenses, reset period"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from limite_real.domain.models import FinancialProfile, ExpenseRecord
from limite_real.domain.exceptions import InvalidExpenseAmountError, ExpenseNotFoundError
from limite_real.domain.engine import validate


def configure_profile(
    total_limit: Optional[Decimal],
    month_spend: Optional[Decimal],
    active_installments: Optional[Decimal],
    closing_day: Optional[int],
    todays_expenses: Iterable[ExpenseRecord] = (),
) -> FinancialProfile:
    """
    Build a new profile, overwriting whatever was configured before.

    Raises:
        ValidationError subclass when parameters are malformed
    """
    profile = FinancialProfile(
        total_limit=total_limit,
        month_spend=month_spend if month_spend is not None else Decimal("0"),
        active_installments=active_installments if active_installments is not None else Decimal("0"),
        closing_day=closing_day,
        todays_expenses=list(todays_expenses),
    )
    validate(profile)
    return profile


def record_expense(
    profile: FinancialProfile,
    amount: Decimal,
    recorded_at: datetime,
) -> Tuple[FinancialProfile, ExpenseRecord]:
    """Append an expense to today's log"""
    if amount <= 0:
        raise InvalidExpenseAmountError("Expense amount must be greater than 0")

    expense = ExpenseRecord(amount=amount, recorded_at=recorded_at)
    return replace(profile, todays_expenses=[*profile.todays_expenses, expense]), expense


def remove_expense(profile: FinancialProfile, expense_id: str) -> FinancialProfile:
    """Drop a single expense (undo)"""
    remaining = [e for e in profile.todays_expenses if e.expense_id != expense_id]
    if len(remaining) == len(profile.todays_expenses):
        raise ExpenseNotFoundError(f"Expense {expense_id} not found")
    return replace(profile, todays_expenses=remaining)


def last_expense(profile: FinancialProfile) -> Optional[ExpenseRecord]:
    return profile.todays_expenses[-1] if profile.todays_expenses else None


def reset_period(profile: FinancialProfile) -> FinancialProfile:
    """Start a new statement period: month spend back to zero, expense log cleared"""
    return replace(profile, month_spend=Decimal("0"), todays_expenses=[])
