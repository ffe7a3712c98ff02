from typing import Any, Callable, Dict, Optional, Type, Union

import requests
from pydantic import BaseModel

from saasadmin import encoding
from saasadmin.errors import SaasAdminError, UnauthorizedError
from saasadmin.models import (
    CreateOrderRequest,
    CreateTenantRequest,
    Order,
    Page,
    Tenant,
    UpdateOrderRequest,
    UpdateTenantRequest,
)

DEFAULT_TIMEOUT = 10

TokenProvider = Callable[[], Optional[str]]


class ApiError(SaasAdminError):
    """Non-2xx answer from the admin API, carrying the server's message."""

    def __init__(self, status_code: int, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.status_code = status_code


class ApiClient:
    """
    Client for the tenant and order endpoints behind API Gateway.

    The bearer token is pulled from ``token_provider`` on every request, so a
    ``SessionTokenProvider`` that is signed in or out later is picked up
    without rebuilding the client.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def fork(self) -> "ApiClient":
        """Same endpoint and token source on a new ``requests.Session``, for use from another thread."""
        return ApiClient(self.base_url, token_provider=self.token_provider, timeout=self.timeout)

    # Tenants

    def get_tenants(self, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None) -> Page[Tenant]:
        data = self._request("GET", "/tenants", params=self._page_params(limit, last_evaluated_key))
        return self._page(Tenant, data)

    def get_tenant(self, tenant_id: str) -> Tenant:
        return Tenant.model_validate(self._request("GET", f"/tenants/{tenant_id}"))

    def create_tenant(self, data: Union[CreateTenantRequest, dict]) -> Tenant:
        payload = self._payload(CreateTenantRequest, data)
        return Tenant.model_validate(self._request("POST", "/tenants", payload=payload))

    def update_tenant(self, tenant_id: str, data: Union[UpdateTenantRequest, dict]) -> Tenant:
        payload = self._payload(UpdateTenantRequest, data)
        return Tenant.model_validate(self._request("PUT", f"/tenants/{tenant_id}", payload=payload))

    def delete_tenant(self, tenant_id: str):
        self._request("DELETE", f"/tenants/{tenant_id}")

    # Orders

    def get_orders(self, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None) -> Page[Order]:
        data = self._request("GET", "/orders", params=self._page_params(limit, last_evaluated_key))
        return self._page(Order, data)

    def get_orders_by_tenant(
        self, tenant_id: str, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None
    ) -> Page[Order]:
        params = self._page_params(limit, last_evaluated_key)
        params["tenantId"] = tenant_id
        return self._page(Order, self._request("GET", "/orders", params=params))

    def get_orders_by_status(
        self, status: str, limit: Optional[int] = None, last_evaluated_key: Optional[str] = None
    ) -> Page[Order]:
        params = self._page_params(limit, last_evaluated_key)
        params["status"] = status
        return self._page(Order, self._request("GET", "/orders", params=params))

    def get_order(self, order_id: str) -> Order:
        return Order.model_validate(self._request("GET", f"/orders/{order_id}"))

    def create_order(self, data: Union[CreateOrderRequest, dict]) -> Order:
        payload = self._payload(CreateOrderRequest, data)
        return Order.model_validate(self._request("POST", "/orders", payload=payload))

    def update_order(self, order_id: str, data: Union[UpdateOrderRequest, dict]) -> Order:
        payload = self._payload(UpdateOrderRequest, data)
        return Order.model_validate(self._request("PUT", f"/orders/{order_id}", payload=payload))

    def delete_order(self, order_id: str):
        self._request("DELETE", f"/orders/{order_id}")

    def health_check(self) -> Dict[str, Any]:
        return self._request("GET", "/health")

    def _request(self, method: str, path: str, params: Optional[dict] = None, payload: Optional[dict] = None):
        headers = {}
        token = self.token_provider() if self.token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"

        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            params=params or None,
            data=encoding.dumps(payload) if payload is not None else None,
            headers=headers,
            timeout=self.timeout,
        )

        if response.status_code == 401:
            raise UnauthorizedError("Session expired or invalid, sign in again")
        if not response.ok:
            raise ApiError(response.status_code, self._error_message(response))
        if response.status_code == 204 or not response.content:
            return None
        return encoding.loads(response.text)

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = encoding.loads(response.text)
        except ValueError:
            body = None
        if isinstance(body, dict) and (body.get("message") or body.get("error")):
            return body.get("message") or body.get("error")
        return f"Request failed with status code {response.status_code}"

    @staticmethod
    def _payload(model: Type[BaseModel], data: Union[BaseModel, dict]) -> dict:
        if not isinstance(data, model):
            data = model.model_validate(data)
        return data.to_item()

    @staticmethod
    def _page_params(limit: Optional[int], last_evaluated_key: Optional[str]) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if limit:
            params["limit"] = limit
        if last_evaluated_key:
            params["lastEvaluatedKey"] = last_evaluated_key
        return params

    @staticmethod
    def _page(model: Type[BaseModel], data: dict) -> Page:
        return Page[model](
            items=[model.model_validate(item) for item in data.get("items", [])],
            last_evaluated_key=data.get("lastEvaluatedKey"),
        )
