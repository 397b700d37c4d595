"""
Configuration profiles for different deployment environments.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import os
from enum import Enum

from skyvault.client.retry import FixedCountRetryStrategy
from skyvault.config.configuration import Configuration, GrpcConfiguration, TransportStrategy


class Profile(str, Enum):
    """Configuration profiles."""

    LAPTOP = "laptop"
    IN_REGION = "in_region"
    LOW_LATENCY = "low_latency"
    LAMBDA = "lambda"


def get_profile() -> Profile:
    """
    Get current configuration profile from environment.

    Checks SKYVAULT_PROFILE. Falls back to the laptop profile.

    Returns:
        Current profile
    """
    env = os.getenv("SKYVAULT_PROFILE") or "laptop"

    try:
        return Profile(env.lower())
    except ValueError:
        return Profile.LAPTOP


def laptop_configuration() -> Configuration:
    """
    Development profile: relaxed deadlines for high-latency networks.

    Returns:
        Configuration with a 15 second deadline and one channel
    """
    return Configuration(
        transport_strategy=TransportStrategy(
            grpc_configuration=GrpcConfiguration(deadline_seconds=15.0)
        ),
        retry_strategy=FixedCountRetryStrategy(max_attempts=3),
    )


def in_region_configuration() -> Configuration:
    """Clients running in the same region as the service."""
    return Configuration(
        transport_strategy=TransportStrategy(
            grpc_configuration=GrpcConfiguration(deadline_seconds=1.1)
        ),
        retry_strategy=FixedCountRetryStrategy(max_attempts=3),
    )


def low_latency_configuration() -> Configuration:
    """Prioritise latency over resiliency: short deadline, fewer retries."""
    return Configuration(
        transport_strategy=TransportStrategy(
            grpc_configuration=GrpcConfiguration(deadline_seconds=0.5)
        ),
        retry_strategy=FixedCountRetryStrategy(max_attempts=2, max_delay=0.2),
    )


def lambda_configuration() -> Configuration:
    """
    Short-lived serverless environments.

    Keepalive pings are disabled because a frozen function cannot answer them
    and the connection would otherwise be torn down between invocations.
    """
    return Configuration(
        transport_strategy=TransportStrategy(
            grpc_configuration=GrpcConfiguration(deadline_seconds=1.1).with_keepalive_disabled()
        ),
        retry_strategy=FixedCountRetryStrategy(max_attempts=3),
    )


PROFILE_CONFIGURATIONS = {
    Profile.LAPTOP: laptop_configuration,
    Profile.IN_REGION: in_region_configuration,
    Profile.LOW_LATENCY: low_latency_configuration,
    Profile.LAMBDA: lambda_configuration,
}


def configuration_for_profile(profile: Profile | str | None = None) -> Configuration:
    """
    Get configuration for a specific profile.

    Args:
        profile: Profile to use (defaults to SKYVAULT_PROFILE)

    Returns:
        Configuration for the profile
    """
    if profile is None:
        profile = get_profile()
    return PROFILE_CONFIGURATIONS[Profile(profile)]()
