"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在调用方做统一捕获与用户提示。

请求失败时抛出的是 RequestFailed 的子类，异常本身携带已经标准化的
Result（见 ``.result``），调用方不会看到 httpx 的原始异常。
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from request_core.domain.models import OutcomeKind, Result


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "STORE_READ_ERROR"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 url、kind 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ValidationError(BusinessError):
    """参数或配置校验失败。"""


class RequestFailed(BusinessError):
    """一次请求最终失败，携带标准化后的错误 Result。"""

    error_code = "REQUEST_FAILED"

    def __init__(self, result: "Result", kind: "OutcomeKind", **extra):
        self.result = result
        self.kind = kind
        super().__init__(
            code=self.error_code,
            message=result.error_msg or "",
            http_status=result.code if result.code is not None else 400,
            **extra,
        )


class BizError(RequestFailed):
    """传输层成功（2xx），但标准化后的 body 中带有业务错误。"""

    error_code = "BIZ_ERROR"


class HttpStatusError(RequestFailed):
    """服务端直接返回了非 2xx 状态码。"""

    error_code = "HTTP_STATUS_ERROR"


class RequestTimeoutError(RequestFailed):
    """请求在超时时间内未完成。"""

    error_code = "TIMEOUT"


class NetworkFailureError(RequestFailed):
    """网络不可达：断网、DNS 失败、连接被拒绝等。"""

    error_code = "NETWORK_FAILURE"


class CorsOrOpaqueError(RequestFailed):
    """无法归类的传输层错误（代理、协议、跨域等）。"""

    error_code = "CORS_OR_OPAQUE"


def error_for(kind: "OutcomeKind", result: "Result", **extra) -> RequestFailed:
    """根据分类结果构造需要抛出的异常实例。"""

    from request_core.domain.models import OutcomeKind

    mapping = {
        OutcomeKind.BIZ_ERROR: BizError,
        OutcomeKind.HTTP_STATUS_ERROR: HttpStatusError,
        OutcomeKind.TIMEOUT: RequestTimeoutError,
        OutcomeKind.NETWORK_FAILURE: NetworkFailureError,
        OutcomeKind.CORS_OR_OPAQUE: CorsOrOpaqueError,
    }
    try:
        cls = mapping[kind]
    except KeyError:
        raise ValueError(f"Not an error outcome: {kind!r}") from None
    return cls(result, kind, **extra)
