"""基于 httpx 的默认 Transport 实现。

- 超时：httpx.TimeoutException -> FailureKind.TIMEOUT
- 断网/连接失败：httpx.NetworkError -> FailureKind.NETWORK_FAILURE
- 其他无法归类的传输层错误（代理、协议、URL 不合法等）-> FailureKind.CORS_OR_OPAQUE
- 非 2xx 响应 -> FailureKind.HTTP_STATUS_ERROR，附带 status/body/headers

可选地对成功的 GET 响应做缓存，缓存的淘汰策略只在本模块内部生效。
"""

from typing import Any, Mapping, Optional

import httpx

from request_core.domain.models import FailureKind, RawOutcome, TransportFailure, TransportSuccess
from request_core.infrastructure.logging.logger import logger
from request_core.transport.cache import ResponseCache, cache_key


class HttpxTransport:
    """默认 Transport：每次请求创建一个 httpx.AsyncClient。"""

    name = "httpx"

    def __init__(
        self,
        timeout_ms: int = 15000,
        cache: Optional[ResponseCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._timeout_ms = timeout_ms
        self._cache = cache
        # 测试时可注入 httpx.MockTransport
        self._transport = transport

    @property
    def cache(self) -> Optional[ResponseCache]:
        return self._cache

    async def send(self, url: str, options: Optional[Mapping[str, Any]] = None) -> RawOutcome:
        opts = dict(options or {})
        method = str(opts.get("method") or "GET").upper()
        key = None
        if self._cache is not None and method == "GET":
            key = cache_key(url, {**opts, "method": method})
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug("cache hit", extra={"extra": {"url": url}})
                return cached

        timeout_ms = opts.get("timeout") or self._timeout_ms
        try:
            async with httpx.AsyncClient(timeout=timeout_ms / 1000.0, transport=self._transport) as client:
                resp = await client.request(
                    method,
                    url,
                    params=opts.get("params"),
                    json=opts.get("json"),
                    data=opts.get("data"),
                    headers=opts.get("headers"),
                )
        except httpx.TimeoutException as e:
            return TransportFailure(kind=FailureKind.TIMEOUT, message=str(e))
        except httpx.NetworkError as e:
            return TransportFailure(kind=FailureKind.NETWORK_FAILURE, message=str(e))
        except (httpx.RequestError, httpx.InvalidURL) as e:
            return TransportFailure(kind=FailureKind.CORS_OR_OPAQUE, message=str(e))

        body = self._parse_body(resp)
        headers = dict(resp.headers)
        if not resp.is_success:
            return TransportFailure(
                kind=FailureKind.HTTP_STATUS_ERROR,
                status=resp.status_code,
                body=body,
                message=resp.reason_phrase,
                headers=headers,
            )
        outcome = TransportSuccess(body=body, status=resp.status_code, headers=headers)
        if key is not None:
            self._cache.set(key, outcome)
        return outcome

    async def aclose(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    @staticmethod
    def _parse_body(resp: httpx.Response) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

