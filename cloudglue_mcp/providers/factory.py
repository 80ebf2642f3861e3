from typing import Dict, Type
from loguru import logger

from .base import VideoPlatformProvider
from .cloudglue_provider import CloudglueProvider
from ..exceptions import ConfigurationException
from ..config.settings import AppConfig


class ProviderFactory:
    """Factory class for creating provider instances."""

    _video_providers: Dict[str, Type[VideoPlatformProvider]] = {
        'cloudglue': CloudglueProvider,
    }

    @classmethod
    def register_video_provider(cls, name: str, provider_class: Type[VideoPlatformProvider]):
        """Register an additional video platform provider under ``name``."""
        if not issubclass(provider_class, VideoPlatformProvider):
            raise ConfigurationException(
                f"{provider_class.__name__} must inherit from VideoPlatformProvider"
            )
        cls._video_providers[name] = provider_class

    @classmethod
    def create_video_provider(cls, provider_name: str = None, config: AppConfig = None, **overrides) -> VideoPlatformProvider:
        """
        Create a video platform provider instance.

        Args:
            provider_name: Name of the provider (optional, defaults to config)
            config: Application config (optional, read from the environment when omitted)
            **overrides: Values that replace entries of the provider config, e.g. api_key

        Returns:
            VideoPlatformProvider instance

        Raises:
            ConfigurationException: If provider is not supported or misconfigured
        """
        config = config or AppConfig()
        if provider_name is None:
            provider_name = config.video_provider

        if provider_name not in cls._video_providers:
            raise ConfigurationException(
                f"Unknown video provider: {provider_name}. "
                f"Supported providers: {list(cls._video_providers.keys())}"
            )

        provider_config = config.cloudglue.model_dump()
        provider_config.update({k: v for k, v in overrides.items() if v is not None})

        provider_class = cls._video_providers[provider_name]
        logger.info(f"Creating video provider: {provider_name}")
        return provider_class(provider_config)


provider_factory = ProviderFactory()
