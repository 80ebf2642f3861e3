"""Process-wide access to configuration and the video platform provider.

The provider is built on first use so that command-line overrides parsed
in ``main`` are applied before any tool runs.
"""

from typing import Optional

from loguru import logger

from cloudglue_mcp.config.settings import AppConfig
from cloudglue_mcp.providers.base import VideoPlatformProvider
from cloudglue_mcp.providers.factory import provider_factory

_config: Optional[AppConfig] = None
_provider: Optional[VideoPlatformProvider] = None
_overrides = {}


def configure(api_key: Optional[str] = None, base_url: Optional[str] = None):
    """Apply command-line overrides; they win over the environment."""
    global _provider
    _overrides.update({k: v for k, v in {"api_key": api_key, "base_url": base_url}.items() if v})
    _provider = None


def get_app_config() -> AppConfig:
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def get_job_timeout() -> float:
    return get_app_config().cloudglue.job_timeout


def get_video_provider() -> VideoPlatformProvider:
    global _provider
    if _provider is None:
        logger.info("Instantiating the video platform provider")
        _provider = provider_factory.create_video_provider(config=get_app_config(), **_overrides)
    return _provider
