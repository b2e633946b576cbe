"""Generic JSON-over-HTTP client.

``ApiClient`` wraps a single ``httpx.AsyncClient`` bound to one base URL.
Every call returns a ``Result``: the decoded body on success, or one of
``TransportError`` / ``HttpStatusError`` / ``DecodeError`` on failure. No
call is ever retried.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import dataclasses
import functools
import logging
from types import MappingProxyType
from typing import Any, Self, TypeVar

import httpx
import json_repair
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import to_jsonable_python

from dental_vision import constants
from dental_vision.core.types import Failure, Result, Success
from dental_vision.exceptions import (
    ApiError,
    DecodeError,
    HttpStatusError,
    TransportError,
)

log = logging.getLogger(__name__)

T = TypeVar("T")

_JSON_HEADERS = {
    "Content-Type": constants.CONTENT_TYPE_JSON,
    "Accept": constants.CONTENT_TYPE_JSON,
}


@dataclasses.dataclass(frozen=True, slots=True)
class Timeouts:
    """Timeouts in seconds.

    ``request`` bounds the whole call, ``connect`` the TCP/TLS handshake, and
    ``socket`` each individual read or write.
    """

    request: float = constants.REQUEST_TIMEOUT
    connect: float = constants.CONNECT_TIMEOUT
    socket: float = constants.SOCKET_TIMEOUT

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(
            self.socket,
            connect=self.connect,
            read=self.socket,
            write=self.socket,
            pool=self.connect,
        )


@functools.lru_cache(maxsize=128)
def _adapter_for(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def _safe_path(endpoint: str) -> str:
    """Endpoint without its query string, which may carry credentials."""
    return endpoint.split("?", 1)[0]


def _lenient_loads(content: bytes | str) -> Any:
    """Parse JSON that has minor malformations such as unquoted literals.

    Raises:
        DecodeError: If nothing JSON-like can be recovered.
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    try:
        value = json_repair.loads(content)
    except ValueError as e:
        raise DecodeError(f"Response is not JSON: {e}") from e
    # json_repair yields "" when the input holds no recoverable value
    if value == "":
        raise DecodeError("Response is not JSON")
    return value


def decode_json(content: bytes | str, response_type: Any) -> Any:
    """Decode a JSON document into ``response_type``.

    Unknown object fields are ignored and compatible scalars are coerced
    (pydantic lax mode). A document that is not strict JSON is parsed again
    leniently before giving up. An empty document decodes as ``None``.

    Raises:
        DecodeError: If the document is not JSON or does not fit the type.
    """
    adapter = _adapter_for(response_type)
    if not content or not content.strip():
        try:
            return adapter.validate_python(None)
        except PydanticValidationError as e:
            raise DecodeError(f"Empty response does not match expected shape: {e}") from e

    try:
        return adapter.validate_json(content)
    except PydanticValidationError as strict_error:
        if not any(err["type"] == "json_invalid" for err in strict_error.errors()):
            raise DecodeError(
                f"Response does not match expected shape: {strict_error}"
            ) from strict_error
        log.debug("Response is not strict JSON, retrying leniently")

    value = _lenient_loads(content)
    try:
        return adapter.validate_python(value)
    except PydanticValidationError as e:
        raise DecodeError(f"Response does not match expected shape: {e}") from e


class ApiClient:
    """Async JSON client for one service.

    Configuration (base URL, extra headers, timeouts) is fixed at construction.
    Instances are safe to share between concurrent tasks; no call mutates
    client state.
    """

    def __init__(
        self,
        base_url: str,
        additional_headers: Mapping[str, str] | None = None,
        *,
        timeouts: Timeouts | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.additional_headers: Mapping[str, str] = MappingProxyType(
            dict(additional_headers or {})
        )
        self.timeouts = timeouts or Timeouts()
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=dict(self.additional_headers),
            timeout=self.timeouts.to_httpx(),
            transport=transport,
        )

    def __repr__(self) -> str:
        # Header values may hold bearer tokens; only show the names.
        return (
            f"ApiClient(base_url={self.base_url!r}, "
            f"headers={sorted(self.additional_headers)!r})"
        )

    # --- Lifecycle ---

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    async def close(self) -> None:
        """Release pooled connections. Safe to call more than once."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # --- Typed operations ---

    async def get(
        self,
        endpoint: str,
        response_type: type[T] | Any,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> Result[T, ApiError]:
        """GET ``endpoint`` and decode the body as ``response_type``."""
        return await self._json_request("GET", endpoint, response_type, params=params)

    async def post(
        self,
        endpoint: str,
        response_type: type[T] | Any,
        body: Any = None,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> Result[T, ApiError]:
        """POST an optional JSON ``body`` and decode the response."""
        return await self._json_request(
            "POST", endpoint, response_type, body=body, params=params
        )

    async def put(
        self,
        endpoint: str,
        response_type: type[T] | Any,
        body: Any = None,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> Result[T, ApiError]:
        """PUT an optional JSON ``body`` and decode the response."""
        return await self._json_request(
            "PUT", endpoint, response_type, body=body, params=params
        )

    async def delete(
        self,
        endpoint: str,
        response_type: type[T] | Any,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> Result[T, ApiError]:
        """DELETE ``endpoint`` and decode the response."""
        return await self._json_request(
            "DELETE", endpoint, response_type, params=params
        )

    async def get_bytes(self, endpoint: str) -> Result[bytes, ApiError]:
        """GET a binary resource without decoding it."""
        result = await self._send("GET", endpoint, headers={"Accept": "*/*"})
        if isinstance(result, Failure):
            return result
        return Success(result.value.content)

    async def post_multipart(
        self,
        endpoint: str,
        response_type: type[T] | Any,
        *,
        files: Mapping[str, tuple[str, bytes, str]],
        data: Mapping[str, str] | None = None,
    ) -> Result[T, ApiError]:
        """POST a multipart form (file uploads) and decode the JSON response."""
        result = await self._send(
            "POST",
            endpoint,
            files=dict(files),
            data=dict(data or {}),
            headers={"Accept": constants.CONTENT_TYPE_JSON},
        )
        return self._decode(result, response_type)

    # --- Internals ---

    async def _json_request(
        self,
        method: str,
        endpoint: str,
        response_type: Any,
        *,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Result[Any, ApiError]:
        kwargs: dict[str, Any] = {"headers": _JSON_HEADERS}
        if body is not None:
            kwargs["json"] = to_jsonable_python(body, by_alias=True, exclude_none=True)
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}
        result = await self._send(method, endpoint, **kwargs)
        return self._decode(result, response_type)

    async def _send(
        self, method: str, endpoint: str, **kwargs: Any
    ) -> Result[httpx.Response, ApiError]:
        path = _safe_path(endpoint)
        log.debug("%s %s%s", method, self.base_url, path)
        try:
            async with asyncio.timeout(self.timeouts.request):
                response = await self._client.request(method, endpoint, **kwargs)
        except TimeoutError:
            return Failure(
                TransportError(
                    f"Request timed out after {self.timeouts.request:g}s: "
                    f"{method} {path}"
                )
            )
        except httpx.TimeoutException as e:
            error = TransportError(f"Request timed out: {method} {path}")
            error.__cause__ = e
            return Failure(error)
        except httpx.RequestError as e:
            error = TransportError(f"Failed to reach {self.base_url}{path}: {e}")
            error.__cause__ = e
            return Failure(error)

        if not response.is_success:
            log.warning("%s %s returned HTTP %d", method, path, response.status_code)
            return Failure(
                HttpStatusError(response.status_code, response.text, url=path)
            )
        return Success(response)

    @staticmethod
    def _decode(
        result: Result[httpx.Response, ApiError], response_type: Any
    ) -> Result[Any, ApiError]:
        if isinstance(result, Failure):
            return result
        response = result.value
        try:
            return Success(decode_json(response.content, response_type))
        except DecodeError as e:
            log.warning("Undecodable response from %s: %s", response.url.path, e)
            return Failure(e)
