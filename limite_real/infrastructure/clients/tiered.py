"""Two-tier limit source: gateway API first, local cache when it is unreachable

Consistency rule: the local cache is best-effort. Every successful gateway
response that carries a profile overwrites it. While the gateway is down,
reads are served from the cache and computed locally with the same engine;
writes only touch the cache and are not replayed to the gateway later.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from limite_real.api.v1.schemas import StateResponse
from limite_real.domain.engine import calculate, validate
from limite_real.domain.exceptions import GatewayUnavailableError, ProfileNotConfiguredError, ExpenseNotFoundError
from limite_real.domain.ledger import record_expense, remove_expense, reset_period, last_expense
from limite_real.domain.models import FinancialProfile, ExpenseRecord, CalculationResult
from limite_real.infrastructure.clients.gateway import GatewayClient
from limite_real.infrastructure.clients.cache import LocalProfileCache
from limite_real.infrastructure.observability.metrics import bot_offline_fallback_counter

logger = logging.getLogger(__name__)


@dataclass
class LimitOutcome:
    """Result of a tiered operation"""

    configured: bool
    result: Optional[CalculationResult] = None
    profile: Optional[FinancialProfile] = None
    expense: Optional[ExpenseRecord] = None
    offline: bool = False


class TieredLimitClient:
    """Primary remote gateway with a secondary local cache"""

    def __init__(
        self,
        remote: GatewayClient,
        cache: LocalProfileCache,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.remote = remote
        self.cache = cache
        self.clock = clock

    async def status(self) -> LimitOutcome:
        try:
            state = await self.remote.get_status()
        except GatewayUnavailableError as e:
            self._note_fallback("status", e)
            profile = self.cache.load()
            if profile is None:
                return LimitOutcome(configured=False, offline=True)
            return self._local(profile)

        if not state.configured:
            self.cache.clear()
            return LimitOutcome(configured=False)
        return self._from_state(state)

    async def configure(self, profile: FinancialProfile) -> LimitOutcome:
        """
        Store a new profile.

        Raises:
            ValidationError subclass before anything is sent
        """
        validate(profile)
        try:
            state = await self.remote.put_profile(profile)
        except GatewayUnavailableError as e:
            self._note_fallback("configure", e)
            self.cache.save(profile)
            return self._local(profile)
        return self._from_state(state)

    async def record_expense(self, amount: Decimal) -> LimitOutcome:
        try:
            response = await self.remote.add_expense(amount)
        except GatewayUnavailableError as e:
            self._note_fallback("record_expense", e)
            profile, expense = record_expense(self._cached_profile(), amount, self.clock())
            self.cache.save(profile)
            outcome = self._local(profile)
            outcome.expense = expense
            return outcome

        profile = response.profile.to_domain()
        self.cache.save(profile)
        return LimitOutcome(
            configured=True,
            result=response.result.to_domain(),
            profile=profile,
            expense=response.expense.to_domain(),
        )

    async def undo_last_expense(self) -> LimitOutcome:
        """
        Remove the most recent expense of today's log.

        Raises:
            ExpenseNotFoundError: When today's log is empty
        """
        try:
            profile = await self.remote.get_profile()
            if profile is None:
                raise ProfileNotConfiguredError("Profile not configured")
            expense = _require_last_expense(profile)
            state = await self.remote.remove_expense(expense.expense_id)
        except GatewayUnavailableError as e:
            self._note_fallback("undo_last_expense", e)
            profile = self._cached_profile()
            expense = _require_last_expense(profile)
            profile = remove_expense(profile, expense.expense_id)
            self.cache.save(profile)
            outcome = self._local(profile)
            outcome.expense = expense
            return outcome

        outcome = self._from_state(state)
        outcome.expense = expense
        return outcome

    async def reset_period(self) -> LimitOutcome:
        try:
            state = await self.remote.reset_period()
        except GatewayUnavailableError as e:
            self._note_fallback("reset_period", e)
            profile = reset_period(self._cached_profile())
            self.cache.save(profile)
            return self._local(profile)
        return self._from_state(state)

    def _from_state(self, state: StateResponse) -> LimitOutcome:
        profile = state.profile.to_domain() if state.profile else None
        if profile is not None:
            self.cache.save(profile)
        return LimitOutcome(
            configured=state.configured,
            result=state.result.to_domain() if state.result else None,
            profile=profile,
        )

    def _local(self, profile: FinancialProfile) -> LimitOutcome:
        return LimitOutcome(
            configured=True,
            result=calculate(profile, self.clock()),
            profile=profile,
            offline=True,
        )

    def _cached_profile(self) -> FinancialProfile:
        profile = self.cache.load()
        if profile is None:
            raise ProfileNotConfiguredError("Profile not configured")
        return profile

    def _note_fallback(self, operation: str, error: Exception) -> None:
        bot_offline_fallback_counter.inc()
        logger.warning(f"Gateway unavailable, using local cache: {error}", extra={"operation": operation})


def _require_last_expense(profile: FinancialProfile) -> ExpenseRecord:
    expense = last_expense(profile)
    if expense is None:
        raise ExpenseNotFoundError("No expenses recorded today")
    return expense
