"""Limit engine - pure calculation of the real daily spending limit"""

import math
from datetime import datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from limite_real.domain.models import FinancialProfile, ExpenseRecord, CalculationResult, LimitStatus
from limite_real.domain.exceptions import (
    InvalidTotalLimit,
    NegativeMonthSpend,
    NegativeInstallments,
    InvalidClosingDay,
)
from limite_real.utils.date_utils import add_months, closing_date_for

WARNING_RATIO = Decimal("0.1")  # Below 10% of the real limit left today
WARNING_DAYS = 3
SECONDS_PER_DAY = 86_400
CENT = Decimal("0.01")


def validate(profile: FinancialProfile) -> None:
    """
    Check financial parameters, raising the first failure found.

    Order: total limit, month spend, installments, closing day.
    Missing month spend / installments are accepted (treated as zero).

    Raises:
        InvalidTotalLimit, NegativeMonthSpend, NegativeInstallments, InvalidClosingDay
    """
    if profile.total_limit is None or profile.total_limit <= 0:
        raise InvalidTotalLimit("Total limit must be greater than 0")

    if profile.month_spend is not None and profile.month_spend < 0:
        raise NegativeMonthSpend("Month spend cannot be negative")

    if profile.active_installments is not None and profile.active_installments < 0:
        raise NegativeInstallments("Active installments cannot be negative")

    closing_day = profile.closing_day
    if (
        closing_day is None
        or isinstance(closing_day, bool)
        or not isinstance(closing_day, int)
        or not 1 <= closing_day <= 31
    ):
        raise InvalidClosingDay("Closing day must be between 1 and 31")


def days_until_closing(closing_day: int, now: datetime) -> int:
    """
    Whole days from `now` until the next statement closing date.

    Rules:
    - Closing day on or before today rolls to next month (closing day itself is "passed")
    - Closing day past the end of a month is clamped to its last day
    - Difference to the closing date at local midnight, rounded up, floored at 0
    """
    closing_date = closing_date_for(now.year, now.month, closing_day)
    if now.day >= closing_date.day:
        year, month = add_months(now.year, now.month, 1)
        closing_date = closing_date_for(year, month, closing_day)

    closing_at = datetime.combine(closing_date, time.min, tzinfo=now.tzinfo)
    seconds = (closing_at - now).total_seconds()
    return max(0, math.ceil(seconds / SECONDS_PER_DAY))


def compute_real_limit(
    total_limit: Decimal,
    month_spend: Optional[Decimal],
    active_installments: Optional[Decimal],
) -> Decimal:
    """Total limit minus committed spend, never negative"""
    committed = (month_spend or Decimal("0")) + (active_installments or Decimal("0"))
    return max(Decimal("0"), total_limit - committed)


def compute_daily_allowance(real_limit: Decimal, days_remaining: int) -> Decimal:
    """Spread the real limit over the remaining days (zero days -> zero allowance)"""
    if days_remaining > 0:
        return real_limit / days_remaining
    return Decimal("0")


def sum_expenses(expenses: Iterable[ExpenseRecord]) -> Decimal:
    return sum((expense.amount for expense in expenses), Decimal("0"))


def compute_available_today(daily_allowance: Decimal, todays_expenses: Iterable[ExpenseRecord]) -> Decimal:
    """Daily allowance minus today's expenses, never negative"""
    return max(Decimal("0"), daily_allowance - sum_expenses(todays_expenses))


def classify_status(available_today: Decimal, real_limit: Decimal, days_remaining: int) -> LimitStatus:
    """
    Map today's remaining allowance to ok / warning / danger.

    - danger:  nothing left today
    - warning: less than 10% of the real limit left, or closing within 3 days
    - ok:      otherwise
    """
    if available_today <= 0:
        return LimitStatus.DANGER

    if available_today < real_limit * WARNING_RATIO or days_remaining <= WARNING_DAYS:
        return LimitStatus.WARNING

    return LimitStatus.OK


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def calculate(profile: FinancialProfile, now: datetime) -> CalculationResult:
    """
    Main entry point: validate the profile and derive today's figures.

    Intermediate values stay unrounded; monetary outputs are rounded to
    2 decimals (half-up) only in the returned result.

    Raises:
        ValidationError subclass for the first malformed field
    """
    validate(profile)

    days_remaining = days_until_closing(profile.closing_day, now)
    real_limit = compute_real_limit(profile.total_limit, profile.month_spend, profile.active_installments)
    daily_allowance = compute_daily_allowance(real_limit, days_remaining)
    today_spent = sum_expenses(profile.todays_expenses)
    available_today = compute_available_today(daily_allowance, profile.todays_expenses)
    status = classify_status(available_today, real_limit, days_remaining)

    return CalculationResult(
        real_limit=round_money(real_limit),
        days_remaining=days_remaining,
        daily_allowance=round_money(daily_allowance),
        today_spent_total=round_money(today_spent),
        available_today=round_money(available_today),
        status=status,
    )
