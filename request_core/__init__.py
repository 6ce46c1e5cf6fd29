"""request_core 顶层包。

该包提供可配置的 HTTP 响应标准化层：把不同后端的返回形状
（200 + 业务码、非 2xx 状态码、超时/断网等）统一为 Result，
并允许调用方定制 URL 前缀、token 注入、缓存、生命周期 hook 与错误提示映射。
"""

from request_core.client import CacheOptions, ClientConfig, NormalizedRequest, get_request
from request_core.domain.exceptions import (
    BizError,
    CorsOrOpaqueError,
    HttpStatusError,
    NetworkFailureError,
    RequestFailed,
    RequestTimeoutError,
)
from request_core.domain.models import Result

__all__ = [
    "BizError",
    "CacheOptions",
    "ClientConfig",
    "CorsOrOpaqueError",
    "HttpStatusError",
    "NetworkFailureError",
    "NormalizedRequest",
    "RequestFailed",
    "RequestTimeoutError",
    "Result",
    "get_request",
]
