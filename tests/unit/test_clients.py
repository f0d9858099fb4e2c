"""Unit tests for the gateway client, local cache and two-tier client"""

import json
import httpx
import pytest
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Dict, Tuple
from limite_real.api.v1.schemas import ProfileSchema, StateResponse, CalculationResponse
from limite_real.domain.engine import calculate
from limite_real.domain.exceptions import (
    GatewayUnavailableError,
    GatewayRequestError,
    ProfileNotConfiguredError,
    InvalidTotalLimit,
    ExpenseNotFoundError,
)
from limite_real.domain.ledger import record_expense
from limite_real.domain.models import FinancialProfile, LimitStatus
from limite_real.infrastructure.clients.gateway import GatewayClient
from limite_real.infrastructure.clients.cache import LocalProfileCache
from limite_real.infrastructure.clients.tiered import TieredLimitClient

Route = Tuple[str, str]


def state_body(profile: FinancialProfile, now: datetime) -> dict:
    return StateResponse(
        configured=True,
        profile=ProfileSchema.from_domain(profile),
        result=CalculationResponse.from_domain(calculate(profile, now)),
    ).model_dump(mode="json")


def make_transport(routes: Dict[Route, Callable[[httpx.Request], httpx.Response]], calls: list) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append((request.method, request.url.path))
        route = routes.get((request.method, request.url.path))
        if route is None:
            raise AssertionError(f"Unexpected request {request.method} {request.url.path}")
        return route(request)

    return httpx.MockTransport(handler)


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.fixture
def cache(tmp_path: Path) -> LocalProfileCache:
    return LocalProfileCache(tmp_path / "cache" / "profile.json")


# GatewayClient


async def test_gateway_get_profile_not_configured():
    transport = make_transport({("GET", "/v1/profile"): lambda r: httpx.Response(404, json={"detail": "nope"})}, [])
    assert await GatewayClient(base_url="http://gateway", transport=transport).get_profile() is None


async def test_gateway_conflict_means_not_configured():
    transport = make_transport({("POST", "/v1/period/reset"): lambda r: httpx.Response(409, json={"detail": "x"})}, [])
    with pytest.raises(ProfileNotConfiguredError):
        await GatewayClient(base_url="http://gateway", transport=transport).reset_period()


async def test_gateway_validation_error_keeps_detail(scenario_profile: FinancialProfile):
    detail = {"kind": "InvalidClosingDay", "message": "Closing day must be between 1 and 31"}
    transport = make_transport({("PUT", "/v1/profile"): lambda r: httpx.Response(400, json={"detail": detail})}, [])

    with pytest.raises(GatewayRequestError) as exc_info:
        await GatewayClient(base_url="http://gateway", transport=transport).put_profile(scenario_profile)

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == detail


async def test_gateway_timeout_is_unavailable():
    def timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    transport = make_transport({("GET", "/v1/status"): timeout}, [])
    with pytest.raises(GatewayUnavailableError):
        await GatewayClient(base_url="http://gateway", transport=transport).get_status()


async def test_gateway_add_expense_sends_amount(scenario_profile: FinancialProfile, fixed_now: datetime):
    sent = {}

    def add_expense(request: httpx.Request) -> httpx.Response:
        sent.update(json.loads(request.content))
        profile, _ = record_expense(scenario_profile, Decimal("1200"), fixed_now)
        body = state_body(profile, fixed_now)
        body["expense"] = ProfileSchema.from_domain(profile).todays_expenses[0].model_dump(mode="json")
        return httpx.Response(200, json=body)

    transport = make_transport({("POST", "/v1/expenses"): add_expense}, [])
    response = await GatewayClient(base_url="http://gateway", transport=transport).add_expense(Decimal("1200"))

    assert sent == {"amount": 1200.0}
    assert response.expense.amount == Decimal("1200")
    assert response.result.available_today == Decimal("4800")


# LocalProfileCache


def test_cache_roundtrip(cache: LocalProfileCache, scenario_profile: FinancialProfile, fixed_now: datetime):
    profile, expense = record_expense(scenario_profile, Decimal("99.5"), fixed_now)

    cache.save(profile)
    loaded = cache.load()

    assert loaded.total_limit == Decimal("50000")
    assert loaded.closing_day == 20
    assert loaded.todays_expenses[0].expense_id == expense.expense_id
    assert loaded.todays_expenses[0].amount == Decimal("99.5")
    assert loaded.todays_expenses[0].recorded_at == fixed_now


def test_cache_missing_or_corrupt(cache: LocalProfileCache):
    assert cache.load() is None

    cache.path.parent.mkdir(parents=True)
    cache.path.write_text("{not json", encoding="utf-8")
    assert cache.load() is None

    cache.clear()
    cache.clear()
    assert not cache.path.exists()


def test_cache_unreadable(cache: LocalProfileCache):
    cache.path.mkdir(parents=True)

    assert cache.load() is None


# TieredLimitClient


def tiered(routes, cache: LocalProfileCache, now: datetime, calls: list | None = None) -> TieredLimitClient:
    transport = make_transport(routes, calls if calls is not None else [])
    remote = GatewayClient(base_url="http://gateway", transport=transport)
    return TieredLimitClient(remote=remote, cache=cache, clock=lambda: now)


async def test_status_online_refreshes_cache(cache, scenario_profile, fixed_now):
    routes = {("GET", "/v1/status"): lambda r: httpx.Response(200, json=state_body(scenario_profile, fixed_now))}

    outcome = await tiered(routes, cache, fixed_now).status()

    assert outcome.configured is True
    assert outcome.offline is False
    assert outcome.result.available_today == Decimal("6000")
    assert outcome.result.status == LimitStatus.OK
    assert cache.load().total_limit == Decimal("50000")


async def test_status_online_not_configured_clears_cache(cache, scenario_profile, fixed_now):
    cache.save(scenario_profile)
    body = {"configured": False, "message": "Profile not configured yet."}
    routes = {("GET", "/v1/status"): lambda r: httpx.Response(200, json=body)}

    outcome = await tiered(routes, cache, fixed_now).status()

    assert outcome.configured is False
    assert cache.load() is None


async def test_status_offline_computes_from_cache(cache, scenario_profile, fixed_now):
    cache.save(scenario_profile)

    outcome = await tiered({("GET", "/v1/status"): unreachable}, cache, fixed_now).status()

    assert outcome.offline is True
    assert outcome.configured is True
    assert outcome.result == calculate(scenario_profile, fixed_now)


async def test_status_offline_without_cache(cache, fixed_now):
    outcome = await tiered({("GET", "/v1/status"): unreachable}, cache, fixed_now).status()

    assert outcome.configured is False
    assert outcome.offline is True


async def test_record_expense_offline_updates_cache(cache, scenario_profile, fixed_now):
    cache.save(scenario_profile)

    outcome = await tiered({("POST", "/v1/expenses"): unreachable}, cache, fixed_now).record_expense(Decimal("1200"))

    assert outcome.offline is True
    assert outcome.expense.amount == Decimal("1200")
    assert outcome.result.available_today == Decimal("4800.00")
    assert [e.amount for e in cache.load().todays_expenses] == [Decimal("1200")]


async def test_record_expense_offline_without_cache(cache, fixed_now):
    client = tiered({("POST", "/v1/expenses"): unreachable}, cache, fixed_now)
    with pytest.raises(ProfileNotConfiguredError):
        await client.record_expense(Decimal("1200"))


async def test_configure_validates_before_sending(cache, scenario_profile, fixed_now):
    calls = []
    client = tiered({}, cache, fixed_now, calls)
    scenario_profile.total_limit = Decimal("0")

    with pytest.raises(InvalidTotalLimit):
        await client.configure(scenario_profile)
    assert calls == []


async def test_configure_offline_keeps_profile_locally(cache, scenario_profile, fixed_now):
    outcome = await tiered({("PUT", "/v1/profile"): unreachable}, cache, fixed_now).configure(scenario_profile)

    assert outcome.offline is True
    assert outcome.result.daily_allowance == Decimal("6000.00")
    assert cache.load().closing_day == 20


async def test_undo_last_expense_online(cache, scenario_profile, fixed_now):
    profile, _ = record_expense(scenario_profile, Decimal("100"), fixed_now)
    profile, latest = record_expense(profile, Decimal("200"), fixed_now)
    after_undo, _ = record_expense(scenario_profile, Decimal("100"), fixed_now)
    calls = []
    routes = {
        ("GET", "/v1/profile"): lambda r: httpx.Response(200, json=ProfileSchema.from_domain(profile).model_dump(mode="json")),
        ("DELETE", f"/v1/expenses/{latest.expense_id}"): lambda r: httpx.Response(200, json=state_body(after_undo, fixed_now)),
    }

    outcome = await tiered(routes, cache, fixed_now, calls).undo_last_expense()

    assert calls == [("GET", "/v1/profile"), ("DELETE", f"/v1/expenses/{latest.expense_id}")]
    assert outcome.expense.expense_id == latest.expense_id
    assert outcome.offline is False
    assert len(cache.load().todays_expenses) == 1


async def test_undo_last_expense_offline_empty_log(cache, scenario_profile, fixed_now):
    cache.save(scenario_profile)
    client = tiered({("GET", "/v1/profile"): unreachable}, cache, fixed_now)

    with pytest.raises(ExpenseNotFoundError):
        await client.undo_last_expense()


async def test_reset_period_offline(cache, scenario_profile, fixed_now):
    profile, _ = record_expense(scenario_profile, Decimal("100"), fixed_now)
    cache.save(profile)

    outcome = await tiered({("POST", "/v1/period/reset"): unreachable}, cache, fixed_now).reset_period()

    assert outcome.offline is True
    assert outcome.result.real_limit == Decimal("45000.00")
    assert cache.load().todays_expenses == []
