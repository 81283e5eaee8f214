"""
Tests for base path resolution and URL helpers.
"""

import pytest

from yaxis_units.config import base_path
from yaxis_units.config.base_path import (
    BasePathConfig, get_asset_url, get_frontend_base_url, get_full_path, get_full_url,
    get_router_basename, get_shareable_url, inject_runtime_config, load_base_path_config
)

SIGNOZ = BasePathConfig(base_path="/signoz/")
ROOT = BasePathConfig()


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv("SIGNOZ_BASE_PATH", raising=False)
    monkeypatch.delenv("BASE_PATH", raising=False)
    # keep a developer's .env out of the tests
    monkeypatch.setattr(base_path, "load_dotenv", lambda: None)
    monkeypatch.setattr(base_path, "_get_secret", lambda name: base_path.os.getenv(name))
    return monkeypatch


def test_default_is_root(clean_env):
    assert load_base_path_config().base_path == "/"


def test_build_time_default(clean_env):
    clean_env.setenv("BASE_PATH", "/admin/observe")
    assert load_base_path_config().base_path == "/admin/observe/"


def test_runtime_value_beats_build_time(clean_env):
    clean_env.setenv("BASE_PATH", "/build/")
    clean_env.setenv("SIGNOZ_BASE_PATH", "/runtime/")
    assert load_base_path_config().base_path == "/runtime/"


def test_runtime_secret_is_read_once(clean_env):
    reads = []

    def secret(name):
        reads.append(name)
        return "/runtime/"

    clean_env.setattr(base_path, "_get_secret", secret)
    assert load_base_path_config().base_path == "/runtime/"
    assert reads == ["SIGNOZ_BASE_PATH"]


def test_override_beats_everything(clean_env):
    clean_env.setenv("SIGNOZ_BASE_PATH", "/runtime/")
    assert load_base_path_config("/explicit").base_path == "/explicit/"


def test_router_basename():
    assert get_router_basename(ROOT) == ""
    assert get_router_basename(SIGNOZ) == "/signoz"


def test_full_path_and_assets():
    assert get_full_path("/dashboard/1", SIGNOZ) == "/signoz/dashboard/1"
    assert get_full_path("dashboard/1", SIGNOZ) == "/signoz/dashboard/1"
    assert get_full_path("/dashboard/1", ROOT) == "/dashboard/1"
    assert get_asset_url("/Images/logo.svg", SIGNOZ) == "/signoz/Images/logo.svg"
    assert get_asset_url("Icons/icon.svg", SIGNOZ) == "/signoz/Icons/icon.svg"


def test_urls_with_origin():
    origin = "https://example.com"
    assert get_full_url("/dashboard/1", origin, SIGNOZ) == "https://example.com/signoz/dashboard/1"
    assert get_full_url("/dashboard/1", None, SIGNOZ) == "/signoz/dashboard/1"
    assert get_shareable_url("/traces", "id=123", origin, SIGNOZ) == "https://example.com/signoz/traces?id=123"
    assert get_shareable_url("/traces", None, origin, SIGNOZ) == "https://example.com/signoz/traces"
    assert get_frontend_base_url(origin, SIGNOZ) == "https://example.com/signoz"
    assert get_frontend_base_url(origin, ROOT) == "https://example.com"
    assert get_frontend_base_url(None, SIGNOZ) == ""


def test_inject_runtime_config():
    html = "<html><head><meta charset=\"utf-8\"></head><body></body></html>"
    out = inject_runtime_config(html, "/signoz")
    assert out.startswith("<html><head>\n\t<base href=\"/signoz/\" />")
    assert "window.__SIGNOZ_CONFIG__ = { basePath: \"/signoz/\" };" in out
    assert out.index("__SIGNOZ_CONFIG__") < out.index("<meta")


def test_inject_runtime_config_requires_head():
    with pytest.raises(ValueError):
        inject_runtime_config("<html><body></body></html>", "/")
