"""
Base path configuration for sub-path deployments.

The app can be served from a sub-path (e.g. /signoz/ or /admin/observe/)
instead of the root. The base path is resolved once per process.

Priority order:
1) Explicit override passed to load_base_path_config()
2) Runtime-injected value (SIGNOZ_BASE_PATH via Streamlit secrets or env)
3) Build-time default (BASE_PATH env, .env supported)
4) '/'
"""

from __future__ import annotations

import functools
import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .settings import UnitSelectorConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BasePathConfig:
    base_path: str = "/"

    @property
    def router_basename(self) -> str:
        """Base path without trailing slash; '' for the root path."""
        if self.base_path == "/":
            return ""
        return self.base_path[:-1]


def _get_secret(name: str) -> Optional[str]:
    """Best-effort read from Streamlit secrets, then environment."""
    try:
        import streamlit as st  # type: ignore

        try:
            val = st.secrets.get(name)  # type: ignore[attr-defined]
        except Exception:
            val = None
        if val:
            return str(val)
    except ImportError:
        pass
    return os.getenv(name)


def normalize_base_path(path: Optional[str]) -> str:
    """Ensure the path ends with '/'; empty input means root."""
    if not path:
        return "/"
    return path if path.endswith("/") else f"{path}/"


def load_base_path_config(override: Optional[str] = None) -> BasePathConfig:
    """
    Resolve the base path following the fallback chain.
    Arguments:
        override: Explicit base path, takes precedence over everything else.
    Returns:
        The resolved BasePathConfig.
    """
    settings = UnitSelectorConfig.BASE_PATH
    load_dotenv()
    runtime_value = _get_secret(settings['runtime_key'])
    build_time_value = os.getenv(settings['build_time_key'])

    if override:
        source, value = "override", override
    elif runtime_value:
        source, value = "runtime", runtime_value
    elif build_time_value:
        source, value = "build-time", build_time_value
    else:
        source, value = "default", settings['default']

    config = BasePathConfig(base_path=normalize_base_path(value))
    logger.info("Base path '%s' (%s)", config.base_path, source)
    return config


@functools.lru_cache(maxsize=None)
def get_base_path_config() -> BasePathConfig:
    """Process-wide base path, read on first use and never re-read."""
    return load_base_path_config()


def _config(config: Optional[BasePathConfig]) -> BasePathConfig:
    return config or get_base_path_config()


def _strip_leading_slash(path: str) -> str:
    return path[1:] if path.startswith("/") else path


def get_base_path(config: Optional[BasePathConfig] = None) -> str:
    return _config(config).base_path


def get_router_basename(config: Optional[BasePathConfig] = None) -> str:
    return _config(config).router_basename


def get_full_path(path: str, config: Optional[BasePathConfig] = None) -> str:
    """
    Prefix a path with the base path.
    e.g. with base '/signoz/': '/dashboard/1' -> '/signoz/dashboard/1'
    """
    return f"{get_base_path(config)}{_strip_leading_slash(path)}"


def get_full_url(path: str, origin: Optional[str] = None, config: Optional[BasePathConfig] = None) -> str:
    """Absolute URL for a path; without an origin this is the full path."""
    full_path = get_full_path(path, config)
    if not origin:
        return full_path
    return f"{origin.rstrip('/')}/{_strip_leading_slash(full_path)}"


def get_shareable_url(path: str, query_string: Optional[str] = None, origin: Optional[str] = None,
                      config: Optional[BasePathConfig] = None) -> str:
    base_url = get_full_url(path, origin, config)
    return f"{base_url}?{query_string}" if query_string else base_url


def get_frontend_base_url(origin: Optional[str] = None, config: Optional[BasePathConfig] = None) -> str:
    """Origin plus base path without trailing slash, '' without an origin."""
    if not origin:
        return ""
    base_path = get_base_path(config)
    return f"{origin.rstrip('/')}{base_path[:-1] if base_path.endswith('/') else base_path}"


def get_asset_url(asset_path: str, config: Optional[BasePathConfig] = None) -> str:
    """e.g. with base '/signoz/': 'Images/logo.svg' -> '/signoz/Images/logo.svg'"""
    return f"{get_base_path(config)}{_strip_leading_slash(asset_path)}"


def inject_runtime_config(index_html: str, prefix: str) -> str:
    """
    Insert a <base> tag and the runtime config script right after <head>.
    Arguments:
        index_html: Contents of index.html.
        prefix: Route prefix the app is served under.
    Returns:
        The processed document.
    Raises:
        ValueError: If the document has no <head> tag.
    """
    head_index = index_html.find("<head>")
    if head_index == -1:
        raise ValueError("index.html does not contain <head> tag")

    prefix = normalize_base_path(prefix)
    runtime_global = UnitSelectorConfig.BASE_PATH['runtime_global']
    base_tag = f'<base href={json.dumps(prefix)} />'
    config_script = f"<script>window.{runtime_global} = {{ basePath: {json.dumps(prefix)} }};</script>"

    insert_pos = head_index + len("<head>")
    injection = f"\n\t{base_tag}\n\t{config_script}\n"
    return index_html[:insert_pos] + injection + index_html[insert_pos:]
