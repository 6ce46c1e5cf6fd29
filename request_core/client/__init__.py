"""请求客户端。

- config: ClientConfig / CacheOptions。
- normalizer: ResultNormalizer，响应分类与错误标准化。
- request: get_request 工厂与 NormalizedRequest。
"""

from request_core.client.config import CacheOptions, ClientConfig
from request_core.client.normalizer import ResultNormalizer
from request_core.client.request import NormalizedRequest, get_request

__all__ = ["CacheOptions", "ClientConfig", "NormalizedRequest", "ResultNormalizer", "get_request"]
