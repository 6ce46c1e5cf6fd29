"""Request-scoped configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union

from request_core.config.settings import settings
from request_core.domain.exceptions import ValidationError
from request_core.domain.models import Result, TransportFailure
from request_core.domain.storage import TokenProvider
from request_core.infrastructure.storage.token_store import default_token_provider


def _nop(*args: Any) -> None:
    return None


def _identity_http_error(raw: TransportFailure) -> Result:
    return Result.coerce(raw.body, raw.status)


@dataclass(frozen=True)
class CacheOptions:
    """GET 响应缓存设置。

    Attributes:
        max: 最大缓存条数，0 表示不限制（交给传输层决定）。
        ttl: 过期时间（毫秒）。
    """

    max: int = 0
    ttl: int = 60000

    @classmethod
    def from_value(cls, value: Union["CacheOptions", Mapping[str, Any], bool, None]) -> Optional["CacheOptions"]:
        """把 cache 配置项转换为 CacheOptions；False/None 表示关闭缓存。"""

        if value is None or value is False:
            return None
        if isinstance(value, CacheOptions):
            return value
        if value is True:
            return cls()
        if isinstance(value, Mapping):
            return cls(max=int(value.get("max") or 0), ttl=int(value.get("ttl") or 60000))
        raise ValidationError(code="INVALID_CACHE", message=f"Unsupported cache option: {value!r}")


def _default_cache() -> Union[CacheOptions, bool]:
    if not settings.cache_enabled:
        return False
    return CacheOptions(max=settings.cache_max, ttl=settings.cache_ttl_ms)


@dataclass
class ClientConfig:
    """get_request 的全部可配置项。

    Attributes:
        prefix: URL 前缀。request('/users') 且 prefix='http://localhost:3000/api'
            时真实 url 为 http://localhost:3000/api/users。
        cache: 设置了就开启缓存，False 表示关闭。
        timeout: 请求超时（毫秒），默认 15 秒。
        normalize: 把后端自己的数据标准化为 Result，从而屏蔽不同服务端的差异。
        normalize_http_error: 服务器直接返回 httpStatus!=2xx 时，把原始响应处理为错误 Result；
            默认按约定形状读取 body。
        http_error_uses_normalize: 为 True 时 httpStatus 错误改用 normalize(body, status) 处理，
            适用于错误响应与成功响应形状相同的后端，此时忽略 normalize_http_error。
        set_token: 每次请求前调用，返回的字段合并进请求头。
        before_request / after_response: 请求开始和结束时的 hook，例如可用于 loading 状态。
        on_error: 全局错误处理，例如显示一个错误提示。
        get_msg_by_http_status: httpStatus!=2xx 时显示的错误提示。
        get_msg_by_biz_code: 针对业务级错误码的错误提示映射，结果覆盖 error_msg。
        biz_msg_fallback_for_http: httpStatus 错误时是否也用 get_msg_by_biz_code 查找提示。
    """

    prefix: str = field(default_factory=lambda: settings.request_prefix)
    cache: Union[CacheOptions, Mapping[str, Any], bool] = field(default_factory=_default_cache)
    timeout: int = field(default_factory=lambda: settings.request_timeout_ms)
    normalize: Callable[..., Any] = Result.coerce
    normalize_http_error: Callable[[TransportFailure], Any] = _identity_http_error
    http_error_uses_normalize: bool = False
    set_token: TokenProvider = field(default_factory=default_token_provider)
    before_request: Callable[[], Any] = _nop
    after_response: Callable[[], Any] = _nop
    on_error: Callable[[Result], Any] = _nop
    get_msg_by_http_status: Callable[[Optional[int]], Optional[str]] = _nop
    get_msg_by_biz_code: Callable[[Optional[str]], Optional[str]] = _nop
    biz_msg_fallback_for_http: bool = True

    def __post_init__(self) -> None:
        if self.timeout is None or self.timeout <= 0:
            raise ValidationError(code="INVALID_TIMEOUT", message=f"timeout must be positive, got {self.timeout!r}")
        self.prefix = self.prefix or ""

    @property
    def cache_options(self) -> Optional[CacheOptions]:
        return CacheOptions.from_value(self.cache)
