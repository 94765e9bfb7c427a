"""LendingClient: one object exposing every protocol operation."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import pandas as pd

from lendkit.chain.provider_factory import create_caller
from lendkit.data.interfaces import ContractCaller, MarketAddresses, PoolAssets
from lendkit.data.platforms import Platform, get_platform
from lendkit.protocol import comptroller, ctoken, markets, price_feed, token
from lendkit.protocol.amounts import Amount
from lendkit.protocol.context import ProtocolContext

logger = logging.getLogger(__name__)


class LendingClient:
    """Client for a Compound-style lending platform.

    Parameters
    ----------
    provider : ContractCaller | Web3 | BaseProvider | str | None
        Where calls go. A ``ContractCaller`` is used as is; anything else
        is handed to ``create_caller`` (URL, network name, web3 object, or
        ``None`` for ``ETH_RPC_URL``).
    platform : str | Platform
        Registered platform name or a ``Platform`` table.
    private_key : str | None
        Local signing key (falls back to ``ETH_PRIVATE_KEY``).
    network : str | None
        Address table to use. Detected from the chain id when omitted;
        set it explicitly for local forks.
    """

    def __init__(
        self,
        provider: Any = None,
        platform: str | Platform = "compound",
        private_key: str | None = None,
        network: str | None = None,
    ) -> None:
        self.platform = platform if isinstance(platform, Platform) else get_platform(platform)
        if isinstance(provider, ContractCaller):
            self.caller = provider
        else:
            self.caller = create_caller(provider, private_key=private_key)
        self.context = ProtocolContext(self.platform, self.caller, network=network)
        logger.debug(
            "LendingClient platform=%s native=%s quote=%s",
            self.platform.name,
            self.platform.native_ctoken,
            self.platform.default_quote,
        )

    @property
    def network(self) -> str:
        return self.context.network_name()

    @property
    def decimals(self) -> Mapping[str, int]:
        return self.platform.decimals

    def get_address(self, contract: str, network: str | None = None) -> str | None:
        """Address of a named contract or asset on *network* (default: current)."""
        return self.platform.address(network or self.network, contract)

    def wait_for_transaction(self, tx_hash: str, timeout: float = 120.0) -> Any:
        return self.caller.wait_for_receipt(tx_hash, timeout=timeout)

    # ------------------------------------------------------------------
    # cToken
    # ------------------------------------------------------------------

    def supply(self, asset: str, amount: Amount, mantissa: bool = False, **overrides: Any) -> str:
        return ctoken.supply(self.context, asset, amount, mantissa=mantissa, **overrides)

    def redeem(self, asset: str, amount: Amount, mantissa: bool = False, **overrides: Any) -> str:
        return ctoken.redeem(self.context, asset, amount, mantissa=mantissa, **overrides)

    def borrow(self, asset: str, amount: Amount, mantissa: bool = False, **overrides: Any) -> str:
        return ctoken.borrow(self.context, asset, amount, mantissa=mantissa, **overrides)

    def repay_borrow(
        self,
        asset: str,
        amount: Amount,
        borrower: str | None = None,
        mantissa: bool = False,
        **overrides: Any,
    ) -> str:
        return ctoken.repay_borrow(
            self.context, asset, amount, borrower=borrower, mantissa=mantissa, **overrides
        )

    def total_supply(self, asset: str) -> str:
        return ctoken.total_supply(self.context, asset)

    def supply_rate(self, asset: str) -> str:
        return ctoken.supply_rate(self.context, asset)

    def total_borrows(self, asset: str) -> str:
        return ctoken.total_borrows(self.context, asset)

    def borrow_rate(self, asset: str) -> str:
        return ctoken.borrow_rate(self.context, asset)

    def reserve_factor(self, asset: str) -> str:
        return ctoken.reserve_factor(self.context, asset)

    def total_reserves(self, asset: str) -> str:
        return ctoken.total_reserves(self.context, asset)

    def get_cash(self, asset: str) -> str:
        return ctoken.get_cash(self.context, asset)

    def exchange_rate(self, asset: str) -> str:
        return ctoken.exchange_rate(self.context, asset)

    def get_contract_address(self, asset: str) -> MarketAddresses:
        return ctoken.get_contract_address(self.context, asset)

    # ------------------------------------------------------------------
    # Comptroller
    # ------------------------------------------------------------------

    def enter_markets(self, markets: str | Sequence[str], **overrides: Any) -> str:
        return comptroller.enter_markets(self.context, markets, **overrides)

    def exit_market(self, market: str, **overrides: Any) -> str:
        return comptroller.exit_market(self.context, market, **overrides)

    def get_assets_in(self, account: str) -> list[str]:
        return comptroller.get_assets_in(self.context, account)

    def collateral_factor(self, asset: str) -> str:
        return comptroller.collateral_factor(self.context, asset)

    def all_markets(self) -> list[str]:
        return comptroller.all_markets(self.context)

    def get_pool_assets(self, ctoken_addresses: Sequence[str]) -> PoolAssets:
        return comptroller.get_pool_assets(self.context, ctoken_addresses)

    # ------------------------------------------------------------------
    # Prices, balances, overview
    # ------------------------------------------------------------------

    def get_price(self, asset: str, in_asset: str | None = None) -> float:
        return price_feed.get_price(self.context, asset, in_asset)

    def get_token_balance(self, address: str, asset: str) -> str:
        return token.get_token_balance(self.context, address, asset)

    def get_block_number(self) -> int:
        return token.get_block_number(self.context)

    def market_snapshot(self, assets: Sequence[str] | None = None) -> pd.DataFrame:
        return markets.market_snapshot(self.context, assets)
