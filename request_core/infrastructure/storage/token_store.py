import json
import os
from pathlib import Path
from typing import Dict, Optional
from uuid import uuid4

from request_core.config.settings import settings
from request_core.domain.exceptions import BusinessError
from request_core.domain.storage import KeyValueStore, TokenProvider


class JsonTokenStore(KeyValueStore):
    """基于单个 JSON 文件的持久化键值存储，用于保存登录 token 等少量数据。"""

    def __init__(self, root: str | Path | None = None):
        self._root = Path(root or settings.storage_root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._path = self._root / "tokens.json"

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise BusinessError(code="STORE_READ_ERROR", message=str(e))
        if not isinstance(data, dict):
            raise BusinessError(code="STORE_READ_ERROR", message=f"{self._path} is not a mapping")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        tmp_path = self._root / f"tokens.{uuid4().hex}.json.tmp"
        try:
            tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise BusinessError(code="STORE_WRITE_ERROR", message=str(e))


def default_token_provider(
    store: Optional[KeyValueStore] = None,
    key: Optional[str] = None,
) -> TokenProvider:
    """默认的 token 读取方式：从持久化存储中读取 token，写入 Authorization 头。

    token 不存在时得到 "Bearer null"，生产环境应当通过 set_token 覆盖。
    """

    token_key = key or settings.token_key
    kv = store

    def set_token() -> Dict[str, str]:
        nonlocal kv
        # 首次调用时才创建默认存储，之后复用同一个实例
        if kv is None:
            kv = JsonTokenStore()
        token = kv.get(token_key)
        return {"Authorization": f"Bearer {token if token is not None else 'null'}"}

    return set_token
