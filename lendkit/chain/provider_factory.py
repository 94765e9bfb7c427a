"""Factory for creating a web3-backed ContractCaller."""

from __future__ import annotations

import logging
import os
from typing import Any

from web3 import Web3
from web3.providers import BaseProvider

from lendkit.chain.web3_caller import Web3Caller
from lendkit.data.constants import CHAIN_NAMES

logger = logging.getLogger(__name__)

_NETWORK_NAMES = frozenset(CHAIN_NAMES.values())


def _provider_from_url(url: str) -> BaseProvider:
    if url.startswith(("http://", "https://")):
        return Web3.HTTPProvider(url)
    if url.endswith(".ipc"):
        return Web3.IPCProvider(url)
    raise ValueError(f"Unsupported provider URL: {url!r} (expected http(s):// or an .ipc path)")


def _resolve_web3(provider: Any) -> Any:
    if isinstance(provider, Web3):
        return provider
    if isinstance(provider, BaseProvider):
        return Web3(provider)
    if provider is not None and not isinstance(provider, str):
        raise TypeError(
            "Argument `provider` must be a Web3 instance, a web3 provider, a URL or a network name"
        )

    if provider is None or provider in _NETWORK_NAMES:
        url = os.environ.get("ETH_RPC_URL")
        if not url:
            raise ValueError(
                f"No RPC URL for network {provider or 'default'!r}; pass a URL or set ETH_RPC_URL"
            )
    else:
        url = provider
    return Web3(_provider_from_url(url))


def create_caller(
    provider: Any = None,
    private_key: str | None = None,
) -> Web3Caller:
    """Create a ``Web3Caller``.

    Parameters
    ----------
    provider : Web3 | BaseProvider | str | None
        A connected ``Web3`` instance, a web3 provider, an ``http(s)://``
        URL, an ``.ipc`` path, or a network name such as ``"mainnet"``.
        A network name or ``None`` falls back to the ``ETH_RPC_URL``
        environment variable.
    private_key : str | None
        Key used to sign transactions locally. Falls back to the
        ``ETH_PRIVATE_KEY`` environment variable; without one, transactions
        are sent from the node's unlocked accounts.
    """
    w3 = _resolve_web3(provider)

    key = private_key or os.environ.get("ETH_PRIVATE_KEY")
    account = w3.eth.account.from_key(key) if key else None

    if account is not None:
        logger.info("Created web3 caller with local signer %s", account.address)
    else:
        logger.info("Created web3 caller without a local signer")
    return Web3Caller(w3, account=account)
