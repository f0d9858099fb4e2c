"""Chat command interpreter - routes messages to the limit client and formats replies"""

import logging
from typing import Optional

from limite_real.bot import messages
from limite_real.bot.commands import Command, CommandKind, parse_command, parse_amount, parse_day, normalize
from limite_real.bot.sessions import SessionStore, SetupSession, SetupStep
from limite_real.domain.exceptions import (
    ValidationError,
    ProfileNotConfiguredError,
    ExpenseNotFoundError,
    GatewayRequestError,
)
from limite_real.domain.models import FinancialProfile
from limite_real.infrastructure.clients.tiered import TieredLimitClient, LimitOutcome
from limite_real.infrastructure.observability.metrics import bot_message_counter

logger = logging.getLogger(__name__)


class ChatInterpreter:
    """Handles one incoming chat message at a time, per sender"""

    def __init__(self, client: TieredLimitClient, sessions: SessionStore | None = None):
        self.client = client
        self.sessions = sessions or SessionStore()

    async def handle(self, sender: str, text: str) -> Optional[str]:
        """
        Process a message and return the reply text.

        Returns None for empty messages. A sender with a setup in progress
        has every message treated as an answer to the pending question.
        """
        if not text or not text.strip():
            return None

        session = self.sessions.get(sender)
        if session is not None:
            bot_message_counter.labels(command="setup_answer").inc()
            return await self._continue_setup(session, text)

        command = parse_command(text)
        bot_message_counter.labels(command=command.kind.value).inc()

        try:
            return await self._dispatch(sender, command)
        except ProfileNotConfiguredError:
            return messages.NOT_CONFIGURED
        except ValidationError as e:
            return messages.validation_failed(e.kind)
        except GatewayRequestError as e:
            logger.error(f"Gateway rejected {command.kind.value}: {e}", extra={"sender": sender})
            return _gateway_error_reply(e)

    async def _dispatch(self, sender: str, command: Command) -> str:
        kind = command.kind

        if kind == CommandKind.GREETING:
            return messages.GREETING
        if kind == CommandKind.HELP:
            return messages.HELP
        if kind == CommandKind.CONFIGURE:
            self.sessions.start(sender)
            return messages.SETUP_START
        if kind == CommandKind.CANCEL:
            return messages.NOTHING_TO_CANCEL
        if kind == CommandKind.TODAY:
            outcome = await self.client.status()
            return _with_notice(outcome, lambda: messages.today(outcome.result))
        if kind == CommandKind.SUMMARY:
            outcome = await self.client.status()
            return _with_notice(outcome, lambda: messages.summary(outcome.result))
        if kind == CommandKind.EXPENSE:
            return await self._record_expense(command)
        if kind == CommandKind.UNDO:
            try:
                outcome = await self.client.undo_last_expense()
            except ExpenseNotFoundError:
                return messages.NO_EXPENSES_TODAY
            return _with_notice(outcome, lambda: messages.expense_removed(outcome.expense.amount, outcome.result))
        if kind == CommandKind.RESET:
            outcome = await self.client.reset_period()
            return _with_notice(outcome, lambda: messages.PERIOD_RESET)

        return messages.UNKNOWN

    async def _record_expense(self, command: Command) -> str:
        if command.amount is None:
            return messages.BAD_EXPENSE_AMOUNT
        if command.amount <= 0:
            return messages.NON_POSITIVE_EXPENSE

        outcome = await self.client.record_expense(command.amount)
        return _with_notice(outcome, lambda: messages.expense_recorded(command.amount, outcome.result))

    async def _continue_setup(self, session: SetupSession, text: str) -> str:
        """Store the answer for the pending step and ask the next question"""
        if normalize(text) == "cancelar":
            self.sessions.finish(session.sender)
            return messages.SETUP_CANCELLED

        if session.step == SetupStep.AWAITING_TOTAL_LIMIT:
            amount = parse_amount(text)
            if amount is None or amount <= 0:
                return messages.ASK_POSITIVE_NUMBER
            session.total_limit = amount
            session.advance()
            return messages.total_limit_saved(amount)

        if session.step == SetupStep.AWAITING_MONTH_SPEND:
            amount = parse_amount(text)
            if amount is None or amount < 0:
                return messages.ASK_NON_NEGATIVE_NUMBER
            session.month_spend = amount
            session.advance()
            return messages.month_spend_saved(amount)

        if session.step == SetupStep.AWAITING_INSTALLMENTS:
            amount = parse_amount(text)
            if amount is None or amount < 0:
                return messages.ASK_NON_NEGATIVE_NUMBER
            session.active_installments = amount
            session.advance()
            return messages.installments_saved(amount)

        closing_day = parse_day(text)
        if closing_day is None or not 1 <= closing_day <= 31:
            return messages.ASK_CLOSING_DAY
        return await self._finish_setup(session, closing_day)

    async def _finish_setup(self, session: SetupSession, closing_day: int) -> str:
        # The session ends here whether or not saving succeeds
        self.sessions.finish(session.sender)
        profile = FinancialProfile(
            total_limit=session.total_limit,
            month_spend=session.month_spend,
            active_installments=session.active_installments,
            closing_day=closing_day,
            todays_expenses=[],
        )

        try:
            outcome = await self.client.configure(profile)
        except ValidationError as e:
            return messages.validation_failed(e.kind)
        except GatewayRequestError as e:
            logger.error(f"Failed to save configuration: {e}", extra={"sender": session.sender})
            return messages.CONFIG_SAVE_FAILED

        logger.info("Setup completed", extra={"sender": session.sender, "offline": outcome.offline})
        return _with_notice(outcome, lambda: messages.setup_complete(profile, outcome.result))


def _with_notice(outcome: LimitOutcome, render) -> str:
    if not outcome.configured:
        reply = messages.NOT_CONFIGURED
    else:
        reply = render()
    return reply + messages.OFFLINE_NOTICE if outcome.offline else reply


def _gateway_error_reply(error: GatewayRequestError) -> str:
    detail = error.detail
    if error.status_code == 400 and isinstance(detail, dict) and "kind" in detail:
        return messages.validation_failed(detail["kind"])
    return messages.REQUEST_FAILED
