"""Remote video platform providers."""

from .base import VideoPlatformProvider, TERMINAL_JOB_STATUSES
from .cloudglue_provider import CloudglueProvider
from .factory import ProviderFactory, provider_factory

__all__ = [
    'VideoPlatformProvider',
    'TERMINAL_JOB_STATUSES',
    'CloudglueProvider',
    'ProviderFactory',
    'provider_factory',
]
