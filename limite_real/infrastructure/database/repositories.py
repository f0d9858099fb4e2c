"""Data access layer for the stored financial profile"""

from decimal import Decimal
from typing import Optional
from sqlalchemy.orm import Session
from limite_real.config import settings
from limite_real.infrastructure.database.models import ProfileRow, ExpenseRow
from limite_real.domain.models import FinancialProfile, ExpenseRecord


class ProfileRepository:
    """Single-record load/save of the financial profile"""

    def __init__(self, db: Session, key: str | None = None):
        self.db = db
        self.key = key or settings.profile_key

    def load(self) -> Optional[FinancialProfile]:
        """Fetch the stored profile, or None when nothing was configured"""
        row = self.db.get(ProfileRow, self.key)
        if row is None:
            return None

        return FinancialProfile(
            total_limit=Decimal(row.total_limit),
            month_spend=Decimal(row.month_spend),
            active_installments=Decimal(row.active_installments),
            closing_day=row.closing_day,
            todays_expenses=[
                ExpenseRecord(
                    amount=Decimal(e.amount),
                    recorded_at=e.recorded_at,
                    expense_id=e.id,
                )
                for e in row.expenses
            ],
        )

    def save(self, profile: FinancialProfile) -> None:
        """Overwrite the stored profile and its expense log"""
        row = self.db.get(ProfileRow, self.key)
        if row is None:
            row = ProfileRow(key=self.key)
            self.db.add(row)

        row.total_limit = profile.total_limit
        row.month_spend = profile.month_spend or Decimal("0")
        row.active_installments = profile.active_installments or Decimal("0")
        row.closing_day = profile.closing_day
        # Existing rows are matched by expense id and overwritten in place
        existing = {e.id: e for e in row.expenses}
        expenses = []
        for position, expense in enumerate(profile.todays_expenses):
            expense_row = existing.get(expense.expense_id)
            if expense_row is None:
                expense_row = ExpenseRow(id=expense.expense_id)
            expense_row.amount = expense.amount
            expense_row.recorded_at = expense.recorded_at
            expense_row.position = position
            expenses.append(expense_row)
        row.expenses = expenses
        self.db.flush()
