"""Prometheus metrics for monitoring limit calculations, expense activity, and bot traffic"""

from decimal import Decimal
from prometheus_client import Counter, Histogram

from limite_real.domain.models import LimitStatus

# Calculation metrics
calculation_counter = Counter(
    "limite_real_calculation_total",
    "Total real-limit calculations",
    ["status"],  # ok | warning | danger
)

available_today_bucket_counter = Counter(
    "limite_real_available_today_bucket",
    "Available-today amounts returned, by bucket",
    ["bucket"],  # 0, 0-1k, 1k-10k, 10k+
)

validation_failure_counter = Counter(
    "limite_real_validation_failures_total",
    "Rejected financial profiles",
    ["kind"],
)

# Profile mutations
expense_counter = Counter(
    "limite_real_expense_total",
    "Expense log changes",
    ["action"],  # recorded | removed
)

period_reset_counter = Counter(
    "limite_real_period_reset_total",
    "Statement period resets",
)

# Chat bot
bot_message_counter = Counter(
    "limite_real_bot_messages_total",
    "Chat messages handled by the bot",
    ["command"],
)

bot_offline_fallback_counter = Counter(
    "limite_real_bot_offline_fallback_total",
    "Bot operations served from the local cache because the gateway was unreachable",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(status: LimitStatus, available_today: Decimal) -> None:
    """Record calculation metrics for monitoring status distribution"""
    calculation_counter.labels(status=LimitStatus(status).value).inc()

    # Bucket available amounts for distribution analysis
    if available_today <= 0:
        bucket = "0"
    elif available_today <= 1_000:
        bucket = "0-1k"
    elif available_today <= 10_000:
        bucket = "1k-10k"
    else:
        bucket = "10k+"

    available_today_bucket_counter.labels(bucket=bucket).inc()
