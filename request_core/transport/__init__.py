"""HTTP Transport 集成层。

该包下的模块负责：
- 定义 Transport 抽象接口 (base)。
- 提供 GET 响应的 TTL 缓存 (cache)。
- 提供基于 httpx 的默认实现 (httpx_transport)。
"""

from typing import TYPE_CHECKING, Optional

import httpx

from request_core.transport.base import TransportClient
from request_core.transport.cache import ResponseCache
from request_core.transport.httpx_transport import HttpxTransport

if TYPE_CHECKING:
    from request_core.client.config import CacheOptions


def create_transport(
    timeout_ms: int,
    cache: Optional["CacheOptions"] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TransportClient:
    """创建默认 Transport；cache 为 None 时不启用缓存。"""

    response_cache = ResponseCache(max_entries=cache.max, ttl_ms=cache.ttl) if cache else None
    return HttpxTransport(timeout_ms=timeout_ms, cache=response_cache, transport=transport)


__all__ = ["HttpxTransport", "ResponseCache", "TransportClient", "create_transport"]
