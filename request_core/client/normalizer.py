"""响应分类与错误标准化。

后端可能用三种方式表达失败：
1) 返回 200，但 body 中的 code/errorCode/errorMsg 表示业务错误；
2) 直接返回 httpStatus!=2xx；
3) 超时、断网等根本没有响应的情况。

ResultNormalizer 把传输层给出的 RawOutcome 统一分类，并构造出唯一形状的 Result。
classify 是纯函数，不触发任何 hook；resolve 在 classify 外围按固定顺序触发
after_response / on_error，并在失败时抛出携带 Result 的异常。
"""

import inspect
from dataclasses import replace
from typing import Any, Optional

from request_core.client.config import ClientConfig
from request_core.domain.exceptions import error_for
from request_core.domain.models import (
    Classification,
    FailureKind,
    OutcomeKind,
    RawOutcome,
    Result,
    TransportFailure,
    TransportSuccess,
)
from request_core.infrastructure.logging.logger import logger

TIMEOUT_RESULT = Result(code=502, error_msg="request timed out, please retry later")
NETWORK_FAILURE_RESULT = Result(code=1000, error_msg="network unreachable, check connection")
CORS_OR_OPAQUE_RESULT = Result(code=1000, error_msg="network issue, possibly cross-origin")

_FIXED_FAILURES = {
    FailureKind.TIMEOUT: (OutcomeKind.TIMEOUT, TIMEOUT_RESULT),
    FailureKind.NETWORK_FAILURE: (OutcomeKind.NETWORK_FAILURE, NETWORK_FAILURE_RESULT),
    FailureKind.CORS_OR_OPAQUE: (OutcomeKind.CORS_OR_OPAQUE, CORS_OR_OPAQUE_RESULT),
}


def _accepts_status(fn: Any) -> bool:
    """normalize 是否能接收第二个参数 status。"""

    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return True
    positional = 0
    for p in sig.parameters.values():
        if p.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            positional += 1
    return positional >= 2


def _first_message(*candidates: Any) -> Optional[str]:
    """按优先级返回第一个非空的提示；空字符串/None 视为不覆盖。"""

    for msg in candidates:
        if msg:
            return msg
    return None


class ResultNormalizer:
    """把 RawOutcome 分类为 Success / BizError / HttpError / NetworkError / TimeoutError。"""

    def __init__(self, config: ClientConfig):
        self._config = config
        self._normalize_takes_status = _accepts_status(config.normalize)

    def _normalize(self, body: Any, status: Optional[int] = None) -> Any:
        if self._normalize_takes_status:
            return self._config.normalize(body, status)
        return self._config.normalize(body)

    # ---- 分类 ----

    def classify(self, raw: RawOutcome) -> Classification:
        if isinstance(raw, TransportSuccess):
            return self._classify_success(raw)
        if raw.kind is FailureKind.HTTP_STATUS_ERROR:
            return self._classify_http_error(raw)
        kind, result = _FIXED_FAILURES[raw.kind]
        return Classification(kind=kind, result=result)

    def _classify_success(self, raw: TransportSuccess) -> Classification:
        # 后台返回 2xx，但 normalize 后可能是 {code: !=2xx} 或带 errorMsg
        candidate = Result.coerce(self._config.normalize(raw.body))
        if not candidate.is_error:
            return Classification(kind=OutcomeKind.SUCCESS, result=candidate)
        error_msg = _first_message(
            self._config.get_msg_by_biz_code(candidate.error_code or None),
            candidate.error_msg,
        )
        return Classification(
            kind=OutcomeKind.BIZ_ERROR,
            result=replace(candidate, data=None, error_msg=error_msg),
        )

    def _classify_http_error(self, raw: TransportFailure) -> Classification:
        if self._config.http_error_uses_normalize:
            normalized = Result.coerce(self._normalize(raw.body, raw.status))
        else:
            normalized = Result.coerce(self._config.normalize_http_error(raw))
        biz_msg = None
        if self._config.biz_msg_fallback_for_http:
            biz_msg = self._config.get_msg_by_biz_code(normalized.error_code or None)
        error_msg = _first_message(
            self._config.get_msg_by_http_status(normalized.code),
            biz_msg,
            normalized.error_msg,
        )
        # 真实的 httpStatus 覆盖 normalize 得到的 code
        code = raw.status if raw.status is not None else normalized.code
        return Classification(
            kind=OutcomeKind.HTTP_STATUS_ERROR,
            result=replace(normalized, code=code, data=None, error_msg=error_msg),
        )

    # ---- hook 编排 ----

    def resolve(self, raw: RawOutcome, url: str = "") -> Result:
        """触发 after_response，分类；失败时触发 on_error 并抛出 RequestFailed。"""

        self._config.after_response()
        classification = self.classify(raw)
        if classification.ok:
            return classification.result

        result = classification.result
        logger.warning(
            "request failed",
            extra={"extra": {"kind": classification.kind.value, "code": result.code, "url": url}},
        )
        self._config.on_error(result)
        raise error_for(classification.kind, result, url=url)
