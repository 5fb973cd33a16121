"""Application configuration helpers."""

from __future__ import annotations

from .discovery import DiscoveryConfig, get_discovery_config
from .env import env_float, env_list, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .external import BreakerConfig, ExternalResourceConfig, get_external_resource_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .merge import DEFAULT_SOURCE_FILES, MergeConfig, get_merge_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "DEFAULT_SOURCE_FILES",
    "BreakerConfig",
    "CacheConfig",
    "ConfigurationError",
    "DiscoveryConfig",
    "ExternalResourceConfig",
    "MergeConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_float",
    "env_list",
    "get_discovery_config",
    "get_external_resource_config",
    "get_merge_config",
    "get_storage_config",
    "require_env_vars",
]
