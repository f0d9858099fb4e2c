"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, PlainSerializer, model_validator

from limite_real.domain.models import FinancialProfile, ExpenseRecord, CalculationResult, LimitStatus

# Monetary values travel as plain JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ExpenseSchema(BaseModel):
    """Single expense in today's log"""

    expense_id: Optional[str] = None
    amount: Money = Field(..., gt=0)
    recorded_at: datetime

    @classmethod
    def from_domain(cls, expense: ExpenseRecord) -> "ExpenseSchema":
        return cls(expense_id=expense.expense_id, amount=expense.amount, recorded_at=expense.recorded_at)

    def to_domain(self) -> ExpenseRecord:
        if self.expense_id:
            return ExpenseRecord(amount=self.amount, recorded_at=self.recorded_at, expense_id=self.expense_id)
        return ExpenseRecord(amount=self.amount, recorded_at=self.recorded_at)


class ProfileSchema(BaseModel):
    """Persisted state shape; also the body of POST /v1/calculate and PUT /v1/profile"""

    total_limit: Optional[Money] = None
    month_spend: Optional[Money] = Decimal("0")
    active_installments: Optional[Money] = Decimal("0")
    closing_day: Optional[int] = None
    todays_expenses: List[ExpenseSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_expense_ids(self) -> "ProfileSchema":
        ids = [e.expense_id for e in self.todays_expenses if e.expense_id]
        if len(ids) != len(set(ids)):
            raise ValueError("todays_expenses contains duplicate expense_id values")
        return self

    @classmethod
    def from_domain(cls, profile: FinancialProfile) -> "ProfileSchema":
        return cls(
            total_limit=profile.total_limit,
            month_spend=profile.month_spend,
            active_installments=profile.active_installments,
            closing_day=profile.closing_day,
            todays_expenses=[ExpenseSchema.from_domain(e) for e in profile.todays_expenses],
        )

    def to_domain(self) -> FinancialProfile:
        return FinancialProfile(
            total_limit=self.total_limit,
            month_spend=self.month_spend,
            active_installments=self.active_installments,
            closing_day=self.closing_day,
            todays_expenses=[e.to_domain() for e in self.todays_expenses],
        )


class CalculationResponse(BaseModel):
    """Derived figures for display"""

    real_limit: Money
    days_remaining: int
    daily_allowance: Money
    today_spent_total: Money
    available_today: Money
    status: LimitStatus

    @classmethod
    def from_domain(cls, result: CalculationResult) -> "CalculationResponse":
        return cls(
            real_limit=result.real_limit,
            days_remaining=result.days_remaining,
            daily_allowance=result.daily_allowance,
            today_spent_total=result.today_spent_total,
            available_today=result.available_today,
            status=result.status,
        )

    def to_domain(self) -> CalculationResult:
        return CalculationResult(
            real_limit=self.real_limit,
            days_remaining=self.days_remaining,
            daily_allowance=self.daily_allowance,
            today_spent_total=self.today_spent_total,
            available_today=self.available_today,
            status=self.status,
        )


class StateResponse(BaseModel):
    """Response for GET /v1/status, PUT /v1/profile and POST /v1/period/reset"""

    configured: bool
    message: Optional[str] = None
    profile: Optional[ProfileSchema] = None
    result: Optional[CalculationResponse] = None


class ExpenseRequest(BaseModel):
    """Request body for POST /v1/expenses"""

    amount: Money = Field(..., gt=0, description="Amount spent")


class ExpenseResponse(BaseModel):
    """Response for POST /v1/expenses"""

    expense: ExpenseSchema
    profile: ProfileSchema
    result: CalculationResponse
