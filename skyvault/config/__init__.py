"""
Client configuration for SkyVault.

Immutable transport configuration composed with ``with_*`` methods, named
profiles, and pydantic-settings backed environment settings.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from skyvault.config.configuration import Configuration, GrpcConfiguration, TransportStrategy
from skyvault.config.middleware import (
    LoggingMiddleware,
    MetricsMiddleware,
    Middleware,
    RequestContext,
)
from skyvault.config.profiles import (
    Profile,
    configuration_for_profile,
    get_profile,
    in_region_configuration,
    lambda_configuration,
    laptop_configuration,
    low_latency_configuration,
)
from skyvault.config.settings import SkyVaultSettings, get_settings, load_settings_from_yaml

__all__ = [
    "Configuration",
    "GrpcConfiguration",
    "TransportStrategy",
    "Middleware",
    "RequestContext",
    "LoggingMiddleware",
    "MetricsMiddleware",
    "Profile",
    "get_profile",
    "configuration_for_profile",
    "laptop_configuration",
    "in_region_configuration",
    "low_latency_configuration",
    "lambda_configuration",
    "SkyVaultSettings",
    "get_settings",
    "load_settings_from_yaml",
]
