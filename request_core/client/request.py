"""get_request 工厂：把配置、Transport 和 ResultNormalizer 组装成一个可调用对象。

用法::

    request = get_request(prefix="http://localhost:3001")
    result = await request("/users")              # Result(code=200, data=...)
    try:
        await request("/users_with_biz_error")
    except RequestFailed as e:
        show(e.result.error_msg)

单次调用的顺序固定为：before_request -> transport.send -> after_response -> on_error（若失败）。
不做任何重试，重试由调用方根据抛出的 Result 自行决定。
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Mapping, Optional

import httpx

from request_core.client.config import ClientConfig
from request_core.client.normalizer import ResultNormalizer
from request_core.domain.models import Result
from request_core.transport import TransportClient, create_transport


def build_headers(caller: Optional[Mapping[str, str]], token: Mapping[str, str]) -> Dict[str, str]:
    """调用方的 headers 在前，token 字段覆盖同名字段。"""

    return {**(caller or {}), **token}


class NormalizedRequest:
    """一个配置好的请求函数，成功返回 Result，失败抛出 RequestFailed。"""

    def __init__(self, config: ClientConfig, transport: TransportClient):
        self.config = config
        self.transport = transport
        self.normalizer = ResultNormalizer(config)

    async def __call__(self, path: str, options: Optional[Mapping[str, Any]] = None) -> Result:
        """发起请求。

        Args:
            path: 相对 prefix 的路径，例如 "/users"。
            options: 可选的请求参数：method / params / json / data / headers / timeout（毫秒）。

        Returns:
            标准化后的成功 Result。

        Raises:
            RequestFailed: 任何失败，``.result`` 为标准化后的错误 Result。
        """
        self.config.before_request()
        url = f"{self.config.prefix}{path}"
        opts = dict(options or {})
        opts["headers"] = build_headers(opts.get("headers"), self.config.set_token())
        raw = await self.transport.send(url, opts)
        return self.normalizer.resolve(raw, url=url)

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "NormalizedRequest":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()


def get_request(
    config: Optional[ClientConfig] = None,
    *,
    transport: Optional[TransportClient] = None,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
    **overrides: Any,
) -> NormalizedRequest:
    """创建请求函数。

    config 与关键字参数可以混用：关键字参数覆盖 config 中的同名字段。
    transport 为空时使用基于 httpx 的默认实现；http_transport 会传给 httpx
    （测试时可传入 httpx.MockTransport）。
    """

    if config is None:
        config = ClientConfig(**overrides)
    elif overrides:
        config = replace(config, **overrides)
    if transport is None:
        transport = create_transport(config.timeout, config.cache_options, transport=http_transport)
    return NormalizedRequest(config, transport)
