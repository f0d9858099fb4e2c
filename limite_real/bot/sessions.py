"""Per-sender guided setup sessions"""

import threading
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional


class SetupStep(Enum):
    """Which answer the bot is waiting for"""

    AWAITING_TOTAL_LIMIT = "awaiting_total_limit"
    AWAITING_MONTH_SPEND = "awaiting_month_spend"
    AWAITING_INSTALLMENTS = "awaiting_installments"
    AWAITING_CLOSING_DAY = "awaiting_closing_day"


_NEXT_STEP = {
    SetupStep.AWAITING_TOTAL_LIMIT: SetupStep.AWAITING_MONTH_SPEND,
    SetupStep.AWAITING_MONTH_SPEND: SetupStep.AWAITING_INSTALLMENTS,
    SetupStep.AWAITING_INSTALLMENTS: SetupStep.AWAITING_CLOSING_DAY,
}


@dataclass
class SetupSession:
    """Answers collected so far for one sender"""

    sender: str
    step: SetupStep = SetupStep.AWAITING_TOTAL_LIMIT
    total_limit: Optional[Decimal] = None
    month_spend: Optional[Decimal] = None
    active_installments: Optional[Decimal] = None

    def advance(self) -> None:
        """Move to the next question; the closing day is the last one"""
        self.step = _NEXT_STEP[self.step]


class SessionStore:
    """In-memory setup sessions keyed by sender identity"""

    def __init__(self):
        self._sessions: Dict[str, SetupSession] = {}
        self._lock = threading.Lock()

    def get(self, sender: str) -> Optional[SetupSession]:
        with self._lock:
            return self._sessions.get(sender)

    def start(self, sender: str) -> SetupSession:
        """Begin (or restart) a setup for this sender"""
        session = SetupSession(sender=sender)
        with self._lock:
            self._sessions[sender] = session
        return session

    def finish(self, sender: str) -> None:
        with self._lock:
            self._sessions.pop(sender, None)
