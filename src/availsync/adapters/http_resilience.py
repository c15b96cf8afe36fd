"""Async HTTP client with retry transport and optional rate limiting."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Coroutine
from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    TypedDict,
    Unpack,
    runtime_checkable,
)

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

from availsync.config.http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from availsync.domain.ports.errors import TransientAdapterError

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._client import UseClientDefault
    from httpx._types import (
        HeaderTypes,
        QueryParamTypes,
        RequestExtensions,
        TimeoutTypes,
        URLTypes,
    )

__all__ = [
    "BlockingClient",
    "Closeable",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "get_json_or_none",
]


class RequestOptions(TypedDict, total=False):
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    follow_redirects: bool | UseClientDefault
    timeout: TimeoutTypes | UseClientDefault
    extensions: RequestExtensions | None


class AsyncClientOptions(TypedDict, total=False):
    base_url: str
    timeout: TimeoutTypes
    headers: HeaderTypes
    transport: httpx.AsyncBaseTransport


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


class ResilientClient:
    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )

        retry_transport = RetryTransport(retry=build_retry(config.retry))
        headers = dict(config.default_headers) if config.default_headers else None

        client_kwargs: AsyncClientOptions = {
            "timeout": config.timeout_seconds,
            "transport": retry_transport,
        }
        if config.base_url is not None:
            client_kwargs["base_url"] = config.base_url
        if headers is not None:
            client_kwargs["headers"] = headers

        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        async def do_request() -> httpx.Response:
            return await self._client.request(method, url, **kwargs)

        return await self._send(do_request)

    async def get(
        self,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def _send(self, func: Callable[[], Awaitable[httpx.Response]]) -> httpx.Response:
        if self._limiter is None:
            return await func()
        async with self._limiter:
            return await func()


async def get_json_or_none(
    client: ResilientClient,
    url: URLTypes,
    *,
    error: type[TransientAdapterError],
    **kwargs: Unpack[RequestOptions],
) -> object | None:
    """GET ``url`` and decode JSON; ``None`` when the resource does not exist.

    Transport failures, timeouts, non-404 error statuses and undecodable bodies
    are raised as ``error``.
    """

    service = client.config.name
    try:
        response = await client.get(url, **kwargs)
    except httpx.HTTPError as exc:
        raise error(f"{service}: request to {url} failed: {exc!r}", service=service) from exc

    if response.status_code == httpx.codes.NOT_FOUND:
        return None
    if response.is_error:
        raise error(
            f"{service}: HTTP {response.status_code} for {url}",
            service=service,
        )
    try:
        return response.json()
    except ValueError as exc:
        raise error(f"{service}: response for {url} is not JSON", service=service) from exc


@runtime_checkable
class Closeable(Protocol):
    def close(self) -> None: ...


class BlockingClient:
    """Drive a ``ResilientClient`` from synchronous callers on one long-lived event loop.

    The loop, the connection pool and the rate limiter are created on first use and
    shared by every call until ``close()``, so a configured rate limit holds across
    calls.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self.config = config
        self._client_factory = client_factory or ResilientClient
        self._runner: asyncio.Runner | None = None
        self._client: ResilientClient | None = None

    @property
    def is_open(self) -> bool:
        return self._runner is not None

    def run[T](self, call: Callable[[ResilientClient], Coroutine[Any, Any, T]]) -> T:
        if self._runner is None:
            self._runner = asyncio.Runner()
        if self._client is None:
            self._client = self._client_factory(self.config)
        return self._runner.run(call(self._client))

    def close(self) -> None:
        runner, client = self._runner, self._client
        self._runner = None
        self._client = None
        if runner is None:
            return
        try:
            if client is not None:
                runner.run(client.aclose())
        finally:
            runner.close()

    def __enter__(self) -> BlockingClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
