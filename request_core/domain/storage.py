from typing import Callable, Dict, Optional, Protocol

# 每次请求前调用，返回需要合并进请求头的字段
TokenProvider = Callable[[], Dict[str, str]]


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...
