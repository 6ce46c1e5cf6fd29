"""统一的请求结果与传输结果数据模型。

本模块定义了调用方与传输层之间共享的标准数据结构：

- Result: 对调用方返回的统一结果（成功和失败都是这个形状）。
- TransportSuccess / TransportFailure: 传输层一次请求的原始结果（RawOutcome）。
- Classification: 归一化器对 RawOutcome 的分类结果。

不同后端返回的 body 形状各异，由 ClientConfig.normalize 负责把它们转换成 Result。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

# Result 成功区间：code - 200 < 100
SUCCESS_BAND = 100

RESULT_KEYS = frozenset({"code", "data", "errorCode", "errorMsg", "error_code", "error_msg"})

_INVALID = object()


def _parse_code(raw: Any) -> Any:
    """把 body 中的 code 转为 int；缺失返回 None，无法转换返回 _INVALID。"""

    if raw is None:
        return None
    if isinstance(raw, bool):
        return _INVALID
    try:
        return int(raw)
    except (TypeError, ValueError):
        return _INVALID


@dataclass(frozen=True)
class Result:
    """统一返回结构。

    - code: 语义状态码。传输层错误时为真实 httpStatus，
      业务层错误时为后端在 body 中给出的 code（例如 200/300）。
    - data: 仅成功时存在。
    - error_code: 业务级错误码（如 ProductNotExists），一般只使用 error_msg。
    - error_msg: 可直接展示给用户的错误信息。
    """

    code: Optional[int] = None
    data: Any = None
    error_code: Optional[str] = None
    error_msg: Optional[str] = None

    @classmethod
    def coerce(cls, value: Any, status: Optional[int] = None) -> "Result":
        """把任意 body 转换为 Result。

        已经是 Result 的直接返回；mapping 按 code/data/errorCode/errorMsg
        读取（也接受 snake_case 键名）；
        不含任何这些键的 mapping 以及其他值整体视为 data；code 不是整数时视为业务错误。
        status 参数仅为了与 normalize(body, status) 的签名保持一致。
        """

        if isinstance(value, Result):
            return value
        if isinstance(value, Mapping):
            if not RESULT_KEYS.intersection(value.keys()):
                # 不符合约定形状的 body 整体作为 data
                return cls(data=value)
            error_msg = value.get("errorMsg", value.get("error_msg"))
            code = _parse_code(value.get("code"))
            if code is _INVALID:
                # code 不是整数时无法判断成功与否，按业务错误处理
                code = None
                error_msg = error_msg or f"invalid response code: {value.get('code')!r}"
            return cls(
                code=code,
                data=value.get("data"),
                error_code=value.get("errorCode", value.get("error_code")),
                error_msg=error_msg,
            )
        return cls(data=value)

    @property
    def is_http_status_error(self) -> bool:
        return self.code is not None and self.code - 200 >= SUCCESS_BAND

    @property
    def is_biz_error(self) -> bool:
        return bool(self.error_code) or bool(self.error_msg)

    @property
    def is_error(self) -> bool:
        return self.is_http_status_error or self.is_biz_error

    def to_dict(self) -> Dict[str, Any]:
        """转换为与后端约定一致的 camelCase 字典，省略缺失字段。"""

        payload = {
            "code": self.code,
            "data": self.data,
            "errorCode": self.error_code,
            "errorMsg": self.error_msg,
        }
        return {k: v for k, v in payload.items() if v is not None}


class FailureKind(str, Enum):
    """传输层给出的失败类型标签。"""

    TIMEOUT = "timeout"
    NETWORK_FAILURE = "network_failure"
    CORS_OR_OPAQUE = "cors_or_opaque"
    HTTP_STATUS_ERROR = "http_status_error"


class OutcomeKind(str, Enum):
    """归一化器的最终分类。"""

    SUCCESS = "success"
    BIZ_ERROR = "biz_error"
    HTTP_STATUS_ERROR = "http_status_error"
    TIMEOUT = "timeout"
    NETWORK_FAILURE = "network_failure"
    CORS_OR_OPAQUE = "cors_or_opaque"


@dataclass(frozen=True)
class TransportSuccess:
    """传输层拿到了 2xx 响应。"""

    body: Any
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TransportFailure:
    """传输层失败。

    kind 为 HTTP_STATUS_ERROR 时 status/body 一定存在，其余情况下通常为空。
    """

    kind: FailureKind
    status: Optional[int] = None
    body: Any = None
    message: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)


RawOutcome = Union[TransportSuccess, TransportFailure]


@dataclass(frozen=True)
class Classification:
    """一次请求的分类结果：kind 为 SUCCESS 时 result 是成功结果，否则是错误结果。"""

    kind: OutcomeKind
    result: Result

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS
