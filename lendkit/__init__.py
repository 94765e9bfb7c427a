"""Client library for Compound-style lending protocols."""

from lendkit.chain.provider_factory import create_caller
from lendkit.client import LendingClient
from lendkit.data.platforms import Platform, get_platform, register_platform

__all__ = [
    "LendingClient",
    "Platform",
    "create_caller",
    "get_platform",
    "register_platform",
]
