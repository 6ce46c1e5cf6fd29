"""请求日志：每行一个 JSON 对象，写入 settings.log_dir/request.log。

请求相关的字段（url / kind / code）固定出现在每条记录里，没有时为 null，
方便按失败类型或接口地址聚合。开启 log_redact_content 时截断消息并去掉 url 的查询串。
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from request_core.config.settings import settings

REQUEST_FIELDS = ("url", "kind", "code")


def _strip_query(url: Optional[str]) -> Optional[str]:
    if not url:
        return url
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


class RequestLogFormatter(logging.Formatter):
    """把 LogRecord 格式化为带请求字段的 JSON 行。

    调用方通过 ``extra={"extra": {...}}`` 传入附加字段。
    """

    def __init__(self, redact: Optional[bool] = None):
        super().__init__()
        self._redact = redact

    @property
    def redact(self) -> bool:
        return settings.log_redact_content if self._redact is None else self._redact

    def format(self, record: logging.LogRecord) -> str:
        extra: Dict[str, Any] = dict(getattr(record, "extra", None) or {})
        msg = record.getMessage()
        request = {name: extra.pop(name, None) for name in REQUEST_FIELDS}
        if self.redact:
            msg = (msg or "")[:64]
            request["url"] = _strip_query(request["url"])
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
            **request,
        }
        payload.update(extra)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("request_core")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return logger
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / "request.log", encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(RequestLogFormatter())
    logger.addHandler(fh)
    return logger


logger = setup_logger()
