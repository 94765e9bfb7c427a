"""web3-backed contract calling."""

from lendkit.chain.provider_factory import create_caller

__all__ = ["create_caller"]
