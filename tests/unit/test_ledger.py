"""Unit tests for profile state transitions"""

import pytest
from datetime import datetime
from decimal import Decimal
from limite_real.domain.models import FinancialProfile
from limite_real.domain.ledger import configure_profile, record_expense, remove_expense, last_expense, reset_period
from limite_real.domain.exceptions import (
    InvalidExpenseAmountError,
    ExpenseNotFoundError,
    InvalidClosingDay,
)


def test_configure_profile_defaults_missing_amounts_to_zero():
    profile = configure_profile(Decimal("10000"), None, None, 5)

    assert profile.month_spend == Decimal("0")
    assert profile.active_installments == Decimal("0")
    assert profile.todays_expenses == []


def test_configure_profile_validates():
    with pytest.raises(InvalidClosingDay):
        configure_profile(Decimal("10000"), Decimal("0"), Decimal("0"), 40)


def test_record_expense_appends(scenario_profile: FinancialProfile, fixed_now: datetime):
    profile, first = record_expense(scenario_profile, Decimal("1200"), fixed_now)
    profile, second = record_expense(profile, Decimal("300"), fixed_now)

    assert [e.amount for e in profile.todays_expenses] == [Decimal("1200"), Decimal("300")]
    assert first.expense_id != second.expense_id
    assert first.recorded_at == fixed_now
    assert scenario_profile.todays_expenses == []  # Input left untouched


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-10")])
def test_record_expense_rejects_non_positive(scenario_profile: FinancialProfile, fixed_now: datetime, amount):
    with pytest.raises(InvalidExpenseAmountError):
        record_expense(scenario_profile, amount, fixed_now)


def test_remove_expense(scenario_profile: FinancialProfile, fixed_now: datetime):
    profile, first = record_expense(scenario_profile, Decimal("1200"), fixed_now)
    profile, second = record_expense(profile, Decimal("300"), fixed_now)

    profile = remove_expense(profile, first.expense_id)

    assert profile.todays_expenses == [second]


def test_remove_expense_unknown_id(scenario_profile: FinancialProfile):
    with pytest.raises(ExpenseNotFoundError):
        remove_expense(scenario_profile, "missing")


def test_last_expense(scenario_profile: FinancialProfile, fixed_now: datetime):
    assert last_expense(scenario_profile) is None

    profile, _ = record_expense(scenario_profile, Decimal("10"), fixed_now)
    profile, latest = record_expense(profile, Decimal("20"), fixed_now)

    assert last_expense(profile) == latest


def test_reset_period_clears_month_spend_and_expenses(scenario_profile: FinancialProfile, fixed_now: datetime):
    profile, _ = record_expense(scenario_profile, Decimal("10"), fixed_now)

    profile = reset_period(profile)

    assert profile.month_spend == Decimal("0")
    assert profile.todays_expenses == []
    assert profile.total_limit == scenario_profile.total_limit
    assert profile.active_installments == scenario_profile.active_installments
    assert profile.closing_day == scenario_profile.closing_day
