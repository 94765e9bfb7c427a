"""Static platform tables and the contract-call interface."""

from lendkit.data.platforms import get_platform, register_platform

__all__ = ["get_platform", "register_platform"]
