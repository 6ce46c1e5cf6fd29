"""领域层模型与协议。

包含：
- models: 统一的 Result / RawOutcome / Classification 模型。
- storage: 键值存储协议 KeyValueStore 与 TokenProvider 类型。
- exceptions: 业务异常类型定义。
"""
