import pytest

from request_core.client.config import CacheOptions, ClientConfig
from request_core.config.settings import RequestSettings
from request_core.domain.exceptions import ValidationError


def test_settings_from_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "custom.yaml"
    cfg.write_text("request_prefix: http://yaml.test\nrequest_timeout_ms: 5000\n", encoding="utf-8")
    monkeypatch.setenv("REQUEST_CORE_CONFIG_FILE", str(cfg))
    monkeypatch.delenv("REQUEST_PREFIX", raising=False)
    s = RequestSettings()
    assert s.request_prefix == "http://yaml.test"
    assert s.request_timeout_ms == 5000


def test_env_overrides_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "custom.yaml"
    cfg.write_text("request_prefix: http://yaml.test\n", encoding="utf-8")
    monkeypatch.setenv("REQUEST_CORE_CONFIG_FILE", str(cfg))
    monkeypatch.setenv("REQUEST_PREFIX", "http://env.test")
    assert RequestSettings().request_prefix == "http://env.test"


def test_settings_reject_empty_token_key():
    with pytest.raises(ValueError):
        RequestSettings(token_key="  ")


def test_client_config_defaults_follow_settings(monkeypatch):
    monkeypatch.setattr("request_core.client.config.settings.request_prefix", "http://defaults.test")
    monkeypatch.setattr("request_core.client.config.settings.cache_enabled", True)
    monkeypatch.setattr("request_core.client.config.settings.cache_max", 3)
    cfg = ClientConfig()
    assert cfg.prefix == "http://defaults.test"
    assert cfg.timeout == 15000
    assert cfg.cache_options == CacheOptions(max=3, ttl=60000)


@pytest.mark.parametrize(
    "value, expected",
    [
        (False, None),
        (None, None),
        (True, CacheOptions()),
        ({}, CacheOptions(max=0, ttl=60000)),
        ({"max": 10}, CacheOptions(max=10, ttl=60000)),
        ({"max": 2, "ttl": 500}, CacheOptions(max=2, ttl=500)),
    ],
)
def test_cache_options_from_value(value, expected):
    assert CacheOptions.from_value(value) == expected


def test_client_config_rejects_bad_values():
    with pytest.raises(ValidationError):
        ClientConfig(timeout=0)
    with pytest.raises(ValidationError):
        ClientConfig(cache="yes").cache_options
