"""Transport 抽象接口。

上层 NormalizedRequest 不直接依赖具体的 HTTP 库，而是依赖此协议：

- 负责：把一次请求发出去，应用超时，并把结果描述为 RawOutcome。
- 不负责：判断业务是否成功，也不抛出异常。所有失败都以带 kind 标签的
  TransportFailure 返回，由 ResultNormalizer 统一分类。

这样可以在测试中用桩实现替换真实网络。
"""

from typing import Any, Mapping, Optional, Protocol

from request_core.domain.models import RawOutcome


class TransportClient(Protocol):
    """HTTP 传输客户端协议。"""

    async def send(self, url: str, options: Optional[Mapping[str, Any]] = None) -> RawOutcome:
        ...

    async def aclose(self) -> None:
        ...
