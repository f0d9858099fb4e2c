"""Display helpers for the single fixed currency (Argentine peso style)"""

from decimal import Decimal, ROUND_HALF_UP

from limite_real.domain.models import LimitStatus

CURRENCY_SYMBOL = "$"

_STATUS_EMOJI = {
    LimitStatus.OK: "✅",
    LimitStatus.WARNING: "⚠️",
    LimitStatus.DANGER: "❌",
}

_STATUS_LABEL = {
    LimitStatus.OK: "Vas bien",
    LimitStatus.WARNING: "Cuidado, te queda poco",
    LimitStatus.DANGER: "No tenés crédito disponible hoy",
}


def format_currency(amount) -> str:
    """
    Format an amount as whole pesos with dot thousands separators.

    Example:
        Decimal("50000") -> "$ 50.000"
        Decimal("333.5") -> "$ 334"
    """
    whole = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if whole < 0 else ""
    digits = f"{abs(int(whole)):,}".replace(",", ".")
    return f"{sign}{CURRENCY_SYMBOL} {digits}"


def status_emoji(status: LimitStatus) -> str:
    return _STATUS_EMOJI[LimitStatus(status)]


def status_label(status: LimitStatus) -> str:
    return _STATUS_LABEL[LimitStatus(status)]
