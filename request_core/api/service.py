"""对外 API 服务模块。

提供简化的函数接口供上层应用调用，使用 settings 中的默认配置。
"""

from typing import Any, Dict, Mapping, Optional

from request_core.client import ClientConfig, NormalizedRequest, get_request
from request_core.domain.exceptions import RequestFailed
from request_core.infrastructure.logging.logger import logger


_request: Optional[NormalizedRequest] = None


def get_default_request() -> NormalizedRequest:
    """获取默认的请求函数实例（单例）。"""
    global _request
    if _request is None:
        _request = get_request(ClientConfig())
    return _request


async def reset_default_request() -> None:
    """关闭并丢弃默认实例，下次调用时按最新 settings 重建。"""
    global _request
    if _request is not None:
        await _request.aclose()
    _request = None


async def fetch(path: str, options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """使用默认配置发起请求。

    Args:
        path: 相对 prefix 的路径
        options: 请求参数（method / params / json / data / headers / timeout）

    Returns:
        成功时 Result 的字典形式，例如 {"code": 200, "data": {...}}

    Raises:
        RequestFailed: 请求失败，异常中携带标准化后的错误 Result
    """
    try:
        result = await get_default_request()(path, options)
    except RequestFailed as e:
        logger.error(f"Request failed: {e.message}", extra={"extra": {
            "path": path,
            "kind": e.kind.value,
            "result": e.result.to_dict(),
        }})
        raise
    return result.to_dict()
