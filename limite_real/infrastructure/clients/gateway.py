"""Gateway API HTTP client used by the chat bot"""

import httpx
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple
from limite_real.api.v1.schemas import ProfileSchema, StateResponse, ExpenseResponse, ExpenseRequest
from limite_real.domain.models import FinancialProfile
from limite_real.domain.exceptions import (
    GatewayUnavailableError,
    GatewayRequestError,
    ProfileNotConfiguredError,
)
from limite_real.config import settings


class GatewayClient:
    """Client for the limit gateway HTTP API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.gateway_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """
        Send a request and map transport failures and error statuses.

        Raises:
            GatewayUnavailableError: On timeout or connection failure
            ProfileNotConfiguredError: On HTTP 409
            GatewayRequestError: On any other error status
        """
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
                return response

            except httpx.TimeoutException as e:
                raise GatewayUnavailableError(f"Gateway timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                detail = _error_detail(e.response)
                if status_code == 409:
                    raise ProfileNotConfiguredError(str(detail)) from e
                raise GatewayRequestError(status_code, detail) from e
            except httpx.RequestError as e:
                raise GatewayUnavailableError(f"Gateway unreachable: {e}") from e

    async def get_profile(self) -> Optional[FinancialProfile]:
        """Stored profile, or None when nothing is configured"""
        try:
            response = await self._request("GET", "/v1/profile")
        except GatewayRequestError as e:
            if e.status_code == 404:
                return None
            raise
        return ProfileSchema.model_validate(response.json()).to_domain()

    async def put_profile(self, profile: FinancialProfile) -> StateResponse:
        body = ProfileSchema.from_domain(profile).model_dump(mode="json")
        response = await self._request("PUT", "/v1/profile", json=body)
        return StateResponse.model_validate(response.json())

    async def get_status(self) -> StateResponse:
        response = await self._request("GET", "/v1/status")
        return StateResponse.model_validate(response.json())

    async def add_expense(self, amount: Decimal) -> ExpenseResponse:
        body = ExpenseRequest(amount=amount).model_dump(mode="json")
        response = await self._request("POST", "/v1/expenses", json=body)
        return ExpenseResponse.model_validate(response.json())

    async def remove_expense(self, expense_id: str) -> StateResponse:
        response = await self._request("DELETE", f"/v1/expenses/{expense_id}")
        return StateResponse.model_validate(response.json())

    async def reset_period(self) -> StateResponse:
        response = await self._request("POST", "/v1/period/reset")
        return StateResponse.model_validate(response.json())


def _error_detail(response: httpx.Response) -> Any:
    try:
        return response.json().get("detail", response.text)
    except ValueError:
        return response.text
