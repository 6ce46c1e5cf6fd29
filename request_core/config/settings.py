"""配置管理模块。

支持从 .env、config.yaml 以及环境变量加载配置。
这里的值只作为 ClientConfig 的默认值，调用 get_request 时显式传入的配置优先。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("REQUEST_CORE_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
        Path(__file__).resolve().parents[1] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if not path or path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class RequestSettings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    # ---- 请求相关配置 ----
    request_prefix: str = Field(
        default="/api",
        description="URL 前缀，request('/users') 的真实地址为 prefix + '/users'",
    )
    request_timeout_ms: int = Field(default=15000, ge=1, description="请求超时时间（毫秒）")

    # ---- 缓存 ----
    cache_enabled: bool = Field(default=False, description="是否开启 GET 响应缓存")
    cache_max: int = Field(default=0, ge=0, description="最大缓存条数，0 表示不限制")
    cache_ttl_ms: int = Field(default=60000, ge=1, description="缓存过期时间（毫秒）")

    # ---- token 存储 ----
    storage_root: str = Field(default=".storage", description="存储根目录")
    token_key: str = Field(default="token", description="token 在存储中的键名")

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("token_key")
    @classmethod
    def validate_token_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("token_key must not be empty")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = RequestSettings()

# 类型别名，让外部代码可以使用 Settings 类型
Settings = RequestSettings
