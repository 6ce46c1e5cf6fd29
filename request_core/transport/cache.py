import copy
import json
import time
from collections import OrderedDict
from dataclasses import replace
from typing import Any, Mapping, Optional, Tuple

from request_core.domain.models import TransportSuccess


def cache_key(url: str, options: Mapping[str, Any]) -> str:
    """url + 请求参数 作为缓存键。"""

    relevant = {k: options.get(k) for k in ("method", "params", "headers")}
    return url + "|" + json.dumps(relevant, sort_keys=True, default=str)


class ResponseCache:
    """进程内的 TTL 缓存，按写入顺序淘汰最旧条目。

    max_entries 为 0 时不限制条数。写入和命中时都复制 body，调用方之间不共享同一个对象。
    """

    def __init__(self, max_entries: int = 0, ttl_ms: int = 60000):
        self._max = max_entries
        self._ttl = ttl_ms / 1000.0
        self._items: "OrderedDict[str, Tuple[float, TransportSuccess]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._items)

    def get(self, key: str) -> Optional[TransportSuccess]:
        entry = self._items.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if time.monotonic() >= expires_at:
            del self._items[key]
            return None
        return _copy(value)

    def set(self, key: str, value: TransportSuccess) -> None:
        self._items.pop(key, None)
        self._items[key] = (time.monotonic() + self._ttl, _copy(value))
        if self._max > 0:
            while len(self._items) > self._max:
                self._items.popitem(last=False)

    def clear(self) -> None:
        self._items.clear()


def _copy(value: TransportSuccess) -> TransportSuccess:
    return replace(value, body=copy.deepcopy(value.body), headers=dict(value.headers))
