"""Chat command grammar (Spanish, case-insensitive)"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional

EXPENSE_PATTERN = re.compile(r"gast[ée]\s+(\d+(?:[.,]\d+)?)", re.IGNORECASE)
AMOUNT_PATTERN = re.compile(r"^-?\d+(?:[.,]\d+)?$")
DAY_PATTERN = re.compile(r"^\d{1,2}$")


class CommandKind(str, Enum):
    GREETING = "greeting"
    TODAY = "today"
    SUMMARY = "summary"
    RESET = "reset"
    CONFIGURE = "configure"
    EXPENSE = "expense"
    UNDO = "undo"
    HELP = "help"
    CANCEL = "cancel"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    amount: Optional[Decimal] = None  # Only for EXPENSE; None when unparseable


_EXACT = {
    "hola": CommandKind.GREETING,
    "hi": CommandKind.GREETING,
    "inicio": CommandKind.GREETING,
    "hoy": CommandKind.TODAY,
    "cuanto puedo gastar": CommandKind.TODAY,
    "resumen": CommandKind.SUMMARY,
    "estado": CommandKind.SUMMARY,
    "reset mes": CommandKind.RESET,
    "resetear mes": CommandKind.RESET,
    "configurar": CommandKind.CONFIGURE,
    "config": CommandKind.CONFIGURE,
    "deshacer": CommandKind.UNDO,
    "borrar ultimo": CommandKind.UNDO,
    "borrar último": CommandKind.UNDO,
    "ayuda": CommandKind.HELP,
    "help": CommandKind.HELP,
    "cancelar": CommandKind.CANCEL,
}


def normalize(text: str) -> str:
    return text.strip().lower()


def parse_command(text: str) -> Command:
    """
    Recognize a top-level command.

    Examples:
        "Hoy"        -> TODAY
        "Gasté 1200" -> EXPENSE(1200)
        "gaste 35,5" -> EXPENSE(35.5)
    """
    normalized = normalize(text)

    kind = _EXACT.get(normalized)
    if kind is not None:
        return Command(kind)

    if "cuánto puedo gastar" in normalized:
        return Command(CommandKind.TODAY)

    if normalized.startswith(("gasté ", "gaste ")):
        match = EXPENSE_PATTERN.search(normalized)
        amount = Decimal(match.group(1).replace(",", ".")) if match else None
        return Command(CommandKind.EXPENSE, amount=amount)

    return Command(CommandKind.UNKNOWN)


def parse_amount(text: str) -> Optional[Decimal]:
    """Numeric reply during setup ("15000", "15000,50", "-3"); None if not a number"""
    normalized = normalize(text)
    if not AMOUNT_PATTERN.match(normalized):
        return None
    try:
        return Decimal(normalized.replace(",", "."))
    except InvalidOperation:
        return None


def parse_day(text: str) -> Optional[int]:
    normalized = normalize(text)
    return int(normalized) if DAY_PATTERN.match(normalized) else None
