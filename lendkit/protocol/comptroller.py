"""Comptroller operations: market membership and market listings."""

from __future__ import annotations

from typing import Any, Sequence

from web3 import Web3

from lendkit.data.constants import COMPTROLLER
from lendkit.data.contracts import COMPTROLLER_ABI
from lendkit.data.interfaces import NamedAddress, PoolAssets
from lendkit.protocol.amounts import error_prefix
from lendkit.protocol.context import ProtocolContext


def _comptroller(ctx: ProtocolContext, prefix: str) -> str:
    address = ctx.address_of(COMPTROLLER)
    if not address:
        raise ValueError(prefix + f"No Comptroller configured on {ctx.network_name()}.")
    return address


def _market_address(ctx: ProtocolContext, market: str, prefix: str) -> str:
    if not isinstance(market, str) or not market:
        raise ValueError(prefix + "Argument `market` must be a string of a cToken market name.")
    name = market if market[0] == "c" else "c" + market
    address = ctx.address_of(name)
    if name not in ctx.platform.ctokens or not address:
        raise ValueError(prefix + f"Provided market `{name}` is not a recognized cToken.")
    return address


def enter_markets(ctx: ProtocolContext, markets: str | Sequence[str], **overrides: Any) -> str:
    """Use the supplied assets of *markets* as collateral.

    Args:
        markets: One market name or a list of them; ``"ETH"`` and
            ``"cETH"`` are equivalent.

    Returns:
        Transaction hash of ``enterMarkets``.
    """
    prefix = error_prefix("enterMarkets")
    if isinstance(markets, str):
        markets = [markets]
    if not isinstance(markets, (list, tuple)):
        raise TypeError(prefix + "Argument `markets` must be an array or string.")

    addresses = [_market_address(ctx, market, prefix) for market in markets]
    return ctx.caller.transact(
        _comptroller(ctx, prefix), COMPTROLLER_ABI, "enterMarkets", [addresses], overrides=overrides
    )


def exit_market(ctx: ProtocolContext, market: str, **overrides: Any) -> str:
    """Stop using *market* as collateral (``exitMarket``)."""
    prefix = error_prefix("exitMarket")
    address = _market_address(ctx, market, prefix)
    return ctx.caller.transact(
        _comptroller(ctx, prefix), COMPTROLLER_ABI, "exitMarket", [address], overrides=overrides
    )


def get_assets_in(ctx: ProtocolContext, account: str) -> list[str]:
    """cToken addresses *account* has entered."""
    prefix = error_prefix("getAssetsIn")
    if not isinstance(account, str) or not Web3.is_address(account):
        raise ValueError(prefix + "Argument `account` must be a valid address.")
    markets = ctx.caller.read(
        _comptroller(ctx, prefix),
        COMPTROLLER_ABI,
        "getAssetsIn",
        [Web3.to_checksum_address(account)],
    )
    return list(markets)


def collateral_factor(ctx: ProtocolContext, asset: str) -> str:
    """Collateral factor of *asset*'s market, scaled by 1e18."""
    prefix = error_prefix("collateralFactor")
    market = _market_address(ctx, asset, prefix)
    _is_listed, factor, _is_comped = ctx.caller.read(
        _comptroller(ctx, prefix), COMPTROLLER_ABI, "markets", [market]
    )
    return str(factor)


def all_markets(ctx: ProtocolContext) -> list[str]:
    """Every cToken address listed by the Comptroller."""
    prefix = error_prefix("allMarkets")
    return list(ctx.caller.read(_comptroller(ctx, prefix), COMPTROLLER_ABI, "getAllMarkets"))


def get_pool_assets(ctx: ProtocolContext, ctoken_addresses: Sequence[str]) -> PoolAssets:
    """Name the cTokens among *ctoken_addresses* and pair them with underlyings.

    Addresses are compared case-insensitively; addresses not in the table
    are skipped.
    """
    wanted = {address.lower() for address in ctoken_addresses}
    table = ctx.addresses()

    result = PoolAssets()
    for name, address in table.items():
        if name not in ctx.platform.ctokens or address.lower() not in wanted:
            continue
        result.ctokens.append(NamedAddress(name=name, address=address))
        underlying = name[1:]
        result.underlyings.append(NamedAddress(name=underlying, address=table.get(underlying)))
    return result
