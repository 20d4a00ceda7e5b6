"""Remote user API as consumed by the admin screen.

Every call resolves to a tagged :data:`~useradmin.core.result.Result`:
``Ok(payload)`` on success, ``Err(ErrorInfo)`` for anything the remote side
or the network reports. Nothing here raises for a failed call, so callers
decide success only from the value they awaited.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol, Type, TypeVar

import httpx
from pydantic import BaseModel

from useradmin.core.config import get_settings
from useradmin.core.errors import ErrorInfo
from useradmin.core.result import Err, Ok, Result
from useradmin.schemas.user import (
    CreatedUserPayload,
    DeletedIdPayload,
    EditedUserPayload,
    UserFields,
    UsersPayload,
)
from useradmin.ui.transform import transform_user_to_gql

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseModel)


class RemoteUserAPI(Protocol):
    async def list(self, limit: int) -> Result[UsersPayload]: ...

    async def create(self, fields: UserFields) -> Result[CreatedUserPayload]: ...

    async def edit(self, id: str, fields: UserFields) -> Result[EditedUserPayload]: ...

    async def delete(self, id: str) -> Result[DeletedIdPayload]: ...


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    if detail is not None:
        # FastAPI validation errors arrive as a list of objects.
        return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
    return response.reason_phrase


class HttpUserAPI:
    """``RemoteUserAPI`` over the reference FastAPI service.

    Pass ``client`` to reuse an existing ``httpx.AsyncClient`` (tests hand in
    one bound to an ``ASGITransport``); otherwise one is created lazily and
    closed by :meth:`aclose`.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.user_api_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.user_api_timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "HttpUserAPI":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def _call(
        self,
        operation: str,
        method: str,
        path: str,
        payload_type: Type[P],
        **kwargs,
    ) -> Result[P]:
        url = f"{self.base_url}{path}"
        try:
            response = await self._http().request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(
                "user_api.network_error",
                extra={"operation": operation, "url": url, "error": repr(exc)},
            )
            return Err(ErrorInfo(
                message=str(exc) or exc.__class__.__name__,
                classification="network",
                operation=operation,
            ))
        if response.status_code >= 400:
            info = ErrorInfo(
                message=_detail(response),
                classification="http",
                operation=operation,
                status_code=response.status_code,
            )
            logger.warning(
                "user_api.http_error",
                extra={"operation": operation, "status_code": response.status_code, "detail": info.message},
            )
            return Err(info)
        try:
            payload = payload_type.model_validate(response.json())
        except ValueError as exc:
            # Covers both undecodable JSON and a body that fails validation.
            return Err(ErrorInfo(
                message=str(exc),
                classification="invalid_response",
                operation=operation,
                status_code=response.status_code,
            ))
        return Ok(payload)

    async def list(self, limit: int) -> Result[UsersPayload]:
        return await self._call("list", "GET", "/users/", UsersPayload, params={"limit": limit})

    async def create(self, fields: UserFields) -> Result[CreatedUserPayload]:
        return await self._call(
            "create", "POST", "/users/", CreatedUserPayload,
            json=transform_user_to_gql(fields),
        )

    async def edit(self, id: str, fields: UserFields) -> Result[EditedUserPayload]:
        return await self._call(
            "edit", "PATCH", f"/users/{id}", EditedUserPayload,
            json=transform_user_to_gql(fields, id=id),
        )

    async def delete(self, id: str) -> Result[DeletedIdPayload]:
        return await self._call("delete", "DELETE", f"/users/{id}", DeletedIdPayload)


__all__ = ["RemoteUserAPI", "HttpUserAPI"]
