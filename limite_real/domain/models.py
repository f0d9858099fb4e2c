"""Domain models - pure Python dataclasses representing business entities"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class LimitStatus(str, Enum):
    """Tri-state classification of today's remaining allowance"""

    OK = "ok"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class ExpenseRecord:
    """Single expense logged by the user ("I spent X")"""

    amount: Decimal
    recorded_at: datetime
    expense_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class FinancialProfile:
    """User-provided card parameters plus today's expense log"""

    total_limit: Optional[Decimal]
    month_spend: Optional[Decimal] = Decimal("0")
    active_installments: Optional[Decimal] = Decimal("0")
    closing_day: Optional[int] = None
    todays_expenses: List[ExpenseRecord] = field(default_factory=list)


@dataclass(frozen=True)
class CalculationResult:
    """Derived figures for display, recomputed on demand"""

    real_limit: Decimal
    days_remaining: int
    daily_allowance: Decimal
    today_spent_total: Decimal
    available_today: Decimal
    status: LimitStatus
