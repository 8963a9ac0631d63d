"""HTTP client for the schema gateway and the collection endpoints"""

from typing import Any, Mapping, Optional

import httpx

from core.logging_config import get_logger
from core.settings import settings

logger = get_logger(__name__)


class ApiError(Exception):
    """Non-2xx response from the gateway or a collection endpoint"""

    def __init__(self, status_code: int, payload: Any = None):
        self.status_code = status_code
        self.payload = payload if payload is not None else {}
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if isinstance(self.payload, Mapping):
            message = self.payload.get("message") or self.payload.get("error") or self.payload.get("detail")
            if isinstance(message, str) and message:
                return message
        return f"Request failed with status {self.status_code}"

    @property
    def field_errors(self) -> dict[str, list[str]]:
        """Per-field errors a collection endpoint returned, if any"""
        if not isinstance(self.payload, Mapping):
            return {}
        errors = self.payload.get("errors")
        if errors is None and isinstance(self.payload.get("data"), Mapping):
            errors = self.payload["data"].get("errors")
        if not isinstance(errors, Mapping):
            return {}
        return {
            key: [messages] if isinstance(messages, str) else list(messages)
            for key, messages in errors.items()
        }


class SchemaApiClient:
    """
    Async client used by the client-side forms.

    Every request carries the anti-forgery header when a nonce is set.
    Collection endpoints are absolute URLs taken from the resolved schema;
    gateway paths are relative to ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "",
        nonce: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        api_prefix: Optional[str] = None,
        csrf_header: Optional[str] = None,
    ):
        self.nonce = nonce
        self.api_prefix = (api_prefix if api_prefix is not None else settings.API_PREFIX).rstrip("/")
        self.csrf_header = csrf_header or settings.CSRF_HEADER
        self._owns_client = http_client is None
        self.http = http_client or httpx.AsyncClient(base_url=base_url, timeout=settings.HTTP_TIMEOUT)

    async def __aenter__(self) -> "SchemaApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http.aclose()

    def headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.nonce:
            headers[self.csrf_header] = self.nonce
        return headers

    async def request(self, method: str, url: str, **kwargs) -> Any:
        """Send a request and return the decoded JSON body.

        Raises ApiError for non-2xx responses and httpx.HTTPError when the
        request itself fails.
        """
        headers = {**self.headers(), **kwargs.pop("headers", {})}
        response = await self.http.request(method, url, headers=headers, **kwargs)
        try:
            payload = response.json() if response.content else {}
        except ValueError:
            payload = {"message": response.text}

        if response.is_error:
            logger.debug(f"{method} {url} -> {response.status_code}")
            raise ApiError(response.status_code, payload)
        return payload

    # Schema gateway

    async def get_schemas(self) -> list[dict[str, Any]]:
        payload = await self.request("GET", f"{self.api_prefix}/schemas")
        return payload.get("data", [])

    async def get_schema(self, key: str) -> dict[str, Any]:
        payload = await self.request("GET", f"{self.api_prefix}/schemas/{key}")
        return payload.get("data", {})

    # Collection endpoints

    async def get_record(self, endpoint: str, record_id: Any) -> dict[str, Any]:
        payload = await self.request("GET", f"{endpoint}/{record_id}")
        # Collection routes may wrap the record in {"data": ...}
        if isinstance(payload, Mapping) and isinstance(payload.get("data"), Mapping):
            return dict(payload["data"])
        return payload

    async def list_records(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> list[dict[str, Any]]:
        payload = await self.request("GET", endpoint, params=dict(params or {}))
        if isinstance(payload, list):
            return payload
        items = (payload.get("data") or {}).get("items") if isinstance(payload.get("data"), Mapping) else None
        if not isinstance(items, list):
            raise ValueError("API response items is not an array")
        return items

    async def create_record(self, endpoint: str, data: Mapping[str, Any]) -> Any:
        return await self.request("POST", endpoint, json=dict(data))

    async def update_record(self, endpoint: str, record_id: Any, data: Mapping[str, Any]) -> Any:
        return await self.request("PUT", f"{endpoint}/{record_id}", json=dict(data))

    async def patch_record(self, endpoint: str, record_id: Any, data: Mapping[str, Any]) -> Any:
        return await self.request("PATCH", f"{endpoint}/{record_id}", json=dict(data))
