from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional

import httpx

from gudang.config import settings
from gudang.core.codes import ErrorCode
from gudang.core.exceptions import BusinessError

logger = logging.getLogger(__name__)

ApiResponse = Dict[str, Any]

_AUTH_FAILURE_STATUSES = {401, 403}


def _clean_params(params: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if not params:
        return None
    return {key: value for key, value in params.items() if value is not None}


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return ""


class InventoryApiClient:
    """Async client for the inventory REST API.

    Every call returns the envelope ``{"data": <json body>, "status": <code>}``,
    which is the shape ``normalize_response`` expects from a fetch function.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        base_url = base_url or settings.API_BASE_URL
        if not base_url:
            raise RuntimeError("API_BASE_URL is not set")
        self._base_url = base_url.rstrip("/")
        self._token = token if token is not None else settings.API_TOKEN
        self._timeout = timeout if timeout is not None else settings.API_TIMEOUT_SECONDS

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        return await self._request("POST", path, json=json)

    async def put(self, path: str, json: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        return await self._request("PUT", path, json=json)

    async def delete(self, path: str) -> ApiResponse:
        return await self._request("DELETE", path)

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Mapping[str, Any]] = None,
    ) -> ApiResponse:
        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout) as client:
                response = await client.request(
                    method,
                    path,
                    params=_clean_params(params),
                    json=dict(json) if json is not None else None,
                    headers=self._headers(),
                )
        except httpx.HTTPError as exc:
            raise BusinessError(ErrorCode.API_UNAVAILABLE, reason=str(exc)) from exc

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "request %s %s status=%s duration_ms=%s",
            method,
            path,
            response.status_code,
            duration_ms,
        )

        if response.status_code in _AUTH_FAILURE_STATUSES:
            raise BusinessError(ErrorCode.API_UNAUTHORIZED, path=path)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise BusinessError(
                ErrorCode.API_REQUEST_FAILED,
                path=path,
                status=str(response.status_code),
                message=_error_message(response),
            ) from exc

        if not response.content:
            return {"data": None, "status": response.status_code}
        try:
            data = response.json()
        except ValueError as exc:
            raise BusinessError(ErrorCode.API_INVALID_RESPONSE, path=path) from exc
        return {"data": data, "status": response.status_code}
