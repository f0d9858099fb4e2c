"""Reply texts for the chat bot"""

from decimal import Decimal

from limite_real.domain.models import CalculationResult, FinancialProfile
from limite_real.utils.formatting import format_currency, status_emoji, status_label

GREETING = (
    "👋 ¡Hola! Soy *Límite Real*\n\n"
    "Te ayudo a saber cuánto podés gastar HOY con tu tarjeta sin pasarte.\n\n"
    "📋 *Aviso legal:*\n"
    "ℹ️ Límite Real no es un banco ni una entidad financiera.\n"
    "No tiene acceso a tu tarjeta.\n"
    "Los cálculos son estimaciones basadas en los datos que vos ingresás.\n\n"
    "💬 Escribí *ayuda* para ver los comandos disponibles."
)

HELP = (
    "📚 *Comandos disponibles*\n\n"
    "💬 *hoy* - Ver cuánto podés gastar hoy\n"
    "📊 *resumen* - Ver resumen completo\n"
    "💸 *Gasté 1200* - Registrar un gasto\n"
    "↩️ *deshacer* - Borrar el último gasto\n"
    "⚙️ *configurar* - Configurar tu tarjeta\n"
    "🔄 *reset mes* - Resetear el mes\n"
    "❓ *ayuda* - Ver esta ayuda\n\n"
    "Ejemplos:\n"
    "• \"Hoy\"\n"
    "• \"Gasté 3500\"\n"
    "• \"Resumen\""
)

UNKNOWN = "🤔 No entendí ese comando.\n\nEscribí *ayuda* para ver los comandos disponibles."
NOT_CONFIGURED = "⚠️ Aún no configuraste tu tarjeta.\n\nEscribí *configurar* para empezar."
NOTHING_TO_CANCEL = "No hay ninguna configuración en curso."
SETUP_CANCELLED = "🛑 Configuración cancelada."
BAD_EXPENSE_AMOUNT = "❌ No pude entender el monto. Escribí: *Gasté 1200*"
NON_POSITIVE_EXPENSE = "❌ El monto debe ser mayor a 0"
NO_EXPENSES_TODAY = "No hay gastos registrados hoy."
PERIOD_RESET = "✅ Mes reseteado correctamente. Los gastos del mes y de hoy fueron limpiados."
REQUEST_FAILED = "❌ Error al procesar el pedido. Intentá de nuevo."
CONFIG_SAVE_FAILED = "❌ Error al guardar la configuración. Intentá de nuevo."
UNEXPECTED_ERROR = "❌ Ocurrió un error. Por favor, intentá de nuevo."
OFFLINE_NOTICE = "\n\n📴 Sin conexión con el servidor: usé los datos guardados en este dispositivo."

SETUP_START = (
    "⚙️ *Configuración de tu tarjeta*\n\n"
    "Vamos a configurar tu tarjeta paso a paso. Escribí *cancelar* para salir.\n\n"
    "1️⃣ Enviame el *límite total* de tu tarjeta (ejemplo: 50000)"
)
ASK_POSITIVE_NUMBER = "❌ Por favor, enviame un número válido mayor a 0"
ASK_NON_NEGATIVE_NUMBER = "❌ Por favor, enviame un número válido (0 o mayor)"
ASK_CLOSING_DAY = "❌ Por favor, enviame un número entre 1 y 31"

VALIDATION_MESSAGES = {
    "InvalidTotalLimit": "El límite total debe ser mayor a 0",
    "NegativeMonthSpend": "Los gastos del mes no pueden ser negativos",
    "NegativeInstallments": "Las cuotas activas no pueden ser negativas",
    "InvalidClosingDay": "El día de cierre debe estar entre 1 y 31",
}


def validation_failed(kind: str) -> str:
    return "⚠️ " + VALIDATION_MESSAGES.get(kind, "Los datos de la tarjeta no son válidos")


def total_limit_saved(amount: Decimal) -> str:
    return (
        f"✅ Límite total: {format_currency(amount)}\n\n"
        "2️⃣ Enviame los *gastos del mes* (ejemplo: 15000 o 0 si no hay)"
    )


def month_spend_saved(amount: Decimal) -> str:
    return (
        f"✅ Gastos del mes: {format_currency(amount)}\n\n"
        "3️⃣ Enviame las *cuotas activas* (ejemplo: 5000 o 0 si no hay)"
    )


def installments_saved(amount: Decimal) -> str:
    return (
        f"✅ Cuotas activas: {format_currency(amount)}\n\n"
        "4️⃣ Enviame el *día de cierre* de tu tarjeta (número del 1 al 31)"
    )


def today(result: CalculationResult) -> str:
    return (
        "💳 *Hoy podés gastar*\n"
        f"*{format_currency(result.available_today)}*\n\n"
        f"📅 Cierre en {result.days_remaining} días\n"
        f"{status_emoji(result.status)} {status_label(result.status)}"
    )


def summary(result: CalculationResult) -> str:
    return (
        "📊 *Resumen*\n\n"
        f"💳 Límite real disponible: {format_currency(result.real_limit)}\n"
        f"📆 Disponible por día: {format_currency(result.daily_allowance)}\n"
        f"💰 Disponible hoy: {format_currency(result.available_today)}\n"
        f"💸 Gastos de hoy: {format_currency(result.today_spent_total)}\n"
        f"📅 Días hasta cierre: {result.days_remaining}\n\n"
        f"{status_emoji(result.status)} Estado: {status_label(result.status)}"
    )


def expense_recorded(amount: Decimal, result: CalculationResult) -> str:
    return (
        "✔️ *Gasto registrado*\n"
        f"Monto: {format_currency(amount)}\n\n"
        f"Te quedan {format_currency(result.available_today)} hoy\n"
        f"{status_emoji(result.status)}"
    )


def expense_removed(amount: Decimal, result: CalculationResult) -> str:
    return (
        "↩️ *Gasto eliminado*\n"
        f"Monto: {format_currency(amount)}\n\n"
        f"Te quedan {format_currency(result.available_today)} hoy\n"
        f"{status_emoji(result.status)}"
    )


def setup_complete(profile: FinancialProfile, result: CalculationResult) -> str:
    return (
        "✅ *Configuración completada*\n\n"
        f"💳 Límite total: {format_currency(profile.total_limit)}\n"
        f"📊 Gastos del mes: {format_currency(profile.month_spend)}\n"
        f"📅 Cuotas activas: {format_currency(profile.active_installments)}\n"
        f"📆 Día de cierre: {profile.closing_day}\n\n"
        f"{today(result)}\n\n"
        "Escribí *hoy* para consultar tu disponible en cualquier momento."
    )
