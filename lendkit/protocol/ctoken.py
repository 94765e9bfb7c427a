"""cToken market operations: supply, redeem, borrow, repay and market reads.

Every operation takes a ``ProtocolContext`` first, resolves the asset
symbol to its cToken address, scales the amount and dispatches one call
through the context's ``ContractCaller``.
"""

from __future__ import annotations

import logging
from typing import Any

from web3 import Web3

from lendkit.data.contracts import CERC20_ABI, CETHER_ABI, ERC20_ABI
from lendkit.data.interfaces import MarketAddresses
from lendkit.protocol.amounts import Amount, error_prefix, to_mantissa
from lendkit.protocol.context import ProtocolContext

logger = logging.getLogger(__name__)


def ctoken_abi(ctx: ProtocolContext, ctoken_name: str) -> list[dict]:
    """cEther ABI for the native market, cErc20 for token markets."""
    return CETHER_ABI if ctx.platform.is_native(ctoken_name) else CERC20_ABI


def _market(ctx: ProtocolContext, asset: str, prefix: str, reason: str) -> tuple[str, str]:
    """Resolve an underlying symbol to ``(cToken name, cToken address)``."""
    if not isinstance(asset, str) or not asset:
        raise ValueError(prefix + "Argument `asset` must be a non-empty string.")
    ctoken_name = "c" + asset
    ctoken_address = ctx.address_of(ctoken_name)
    if not ctoken_address or asset not in ctx.platform.underlyings:
        raise ValueError(prefix + f"Argument `asset` {reason}.")
    return ctoken_name, ctoken_address


def _scale(ctx: ProtocolContext, asset: str, amount: Amount, mantissa: bool, prefix: str) -> int:
    decimals = ctx.decimals_of(asset)
    if decimals is None:
        raise ValueError(prefix + f"No decimals configured for `{asset}`.")
    return to_mantissa(amount, decimals, mantissa=mantissa, prefix=prefix)


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def supply(
    ctx: ProtocolContext,
    asset: str,
    amount: Amount,
    mantissa: bool = False,
    **overrides: Any,
) -> str:
    """Supply *asset* to its market (``mint``).

    Args:
        asset: Underlying symbol, e.g. ``"ETH"`` or ``"USDC"``.
        amount: Amount in natural units, or base units with ``mantissa``.
        mantissa: Whether *amount* is already scaled to base units.
        **overrides: Transaction parameters (``gas``, ``nonce``, ...).

    Returns:
        Transaction hash.
    """
    prefix = error_prefix("supply")
    ctoken_name, ctoken_address = _market(ctx, asset, prefix, "cannot be supplied")
    value = _scale(ctx, asset, amount, mantissa, prefix)

    if ctx.platform.is_native(ctoken_name):
        return ctx.caller.transact(
            ctoken_address, CETHER_ABI, "mint", [], value=value, overrides=overrides
        )
    return ctx.caller.transact(ctoken_address, CERC20_ABI, "mint", [value], overrides=overrides)


def redeem(
    ctx: ProtocolContext,
    asset: str,
    amount: Amount,
    mantissa: bool = False,
    **overrides: Any,
) -> str:
    """Redeem from a market.

    Passing a cToken name (``"cDAI"``) redeems that many cTokens
    (``redeem``); passing an underlying (``"DAI"``) redeems that much of
    the underlying (``redeemUnderlying``).
    """
    prefix = error_prefix("redeem")
    if not isinstance(asset, str) or not asset:
        raise ValueError(prefix + "Argument `asset` must be a non-empty string.")

    asset_is_ctoken = asset[0] == "c"
    ctoken_name = asset if asset_is_ctoken else "c" + asset
    underlying_name = asset[1:] if asset_is_ctoken else asset

    if (
        ctoken_name not in ctx.platform.ctokens
        or underlying_name not in ctx.platform.underlyings
    ):
        raise ValueError(prefix + "Argument `asset` is not supported.")
    ctoken_address = ctx.address_of(ctoken_name)
    if not ctoken_address:
        raise ValueError(prefix + f"Market `{ctoken_name}` is not deployed on {ctx.network_name()}.")

    value = _scale(ctx, asset, amount, mantissa, prefix)
    method = "redeem" if asset_is_ctoken else "redeemUnderlying"
    return ctx.caller.transact(
        ctoken_address, ctoken_abi(ctx, ctoken_name), method, [value], overrides=overrides
    )


def borrow(
    ctx: ProtocolContext,
    asset: str,
    amount: Amount,
    mantissa: bool = False,
    **overrides: Any,
) -> str:
    """Borrow *asset*. The account must already have entered a collateral market."""
    prefix = error_prefix("borrow")
    ctoken_name, ctoken_address = _market(ctx, asset, prefix, "cannot be borrowed")
    value = _scale(ctx, asset, amount, mantissa, prefix)
    return ctx.caller.transact(
        ctoken_address, ctoken_abi(ctx, ctoken_name), "borrow", [value], overrides=overrides
    )


def repay_borrow(
    ctx: ProtocolContext,
    asset: str,
    amount: Amount,
    borrower: str | None = None,
    mantissa: bool = False,
    **overrides: Any,
) -> str:
    """Repay a borrow, either the sender's own or *borrower*'s.

    Token markets need an allowance, so an ERC-20 ``approve`` of the
    cToken is sent to the underlying before the repay itself.
    """
    prefix = error_prefix("repayBorrow")
    ctoken_name, ctoken_address = _market(ctx, asset, prefix, "is not supported")

    behalf = isinstance(borrower, str) and Web3.is_address(borrower)
    if borrower and not behalf:
        raise ValueError(prefix + "Invalid `borrower` address.")

    value = _scale(ctx, asset, amount, mantissa, prefix)
    method = "repayBorrowBehalf" if behalf else "repayBorrow"
    args: list[Any] = [Web3.to_checksum_address(borrower)] if behalf else []

    if ctx.platform.is_native(ctoken_name):
        return ctx.caller.transact(
            ctoken_address, CETHER_ABI, method, args, value=value, overrides=overrides
        )

    underlying_address = ctx.address_of(asset)
    if not underlying_address:
        raise ValueError(prefix + f"No token address for `{asset}` on {ctx.network_name()}.")
    approve_hash = ctx.caller.transact(
        underlying_address, ERC20_ABI, "approve", [ctoken_address, value]
    )
    logger.debug("Approved %s %s for %s: %s", value, asset, ctoken_name, approve_hash)

    args.append(value)
    return ctx.caller.transact(ctoken_address, CERC20_ABI, method, args, overrides=overrides)


# ---------------------------------------------------------------------------
# Market reads
# ---------------------------------------------------------------------------


def _read_market(ctx: ProtocolContext, asset: str, method: str, operation: str) -> str:
    ctoken_name, ctoken_address = _market(ctx, asset, error_prefix(operation), "is not supported")
    result = ctx.caller.read(ctoken_address, ctoken_abi(ctx, ctoken_name), method)
    return str(result)


def total_supply(ctx: ProtocolContext, asset: str) -> str:
    """Total cTokens in circulation (8 decimals)."""
    return _read_market(ctx, asset, "totalSupply", "totalSupply")


def supply_rate(ctx: ProtocolContext, asset: str) -> str:
    """Per-block supply rate, scaled by 1e18."""
    return _read_market(ctx, asset, "supplyRatePerBlock", "supplyRate")


def total_borrows(ctx: ProtocolContext, asset: str) -> str:
    return _read_market(ctx, asset, "totalBorrowsCurrent", "totalBorrows")


def borrow_rate(ctx: ProtocolContext, asset: str) -> str:
    """Per-block borrow rate, scaled by 1e18."""
    return _read_market(ctx, asset, "borrowRatePerBlock", "borrowRate")


def reserve_factor(ctx: ProtocolContext, asset: str) -> str:
    return _read_market(ctx, asset, "reserveFactorMantissa", "reserveFactor")


def total_reserves(ctx: ProtocolContext, asset: str) -> str:
    return _read_market(ctx, asset, "totalReserves", "totalReserves")


def get_cash(ctx: ProtocolContext, asset: str) -> str:
    """Underlying held by the market and available to borrow."""
    return _read_market(ctx, asset, "getCash", "getCash")


def exchange_rate(ctx: ProtocolContext, asset: str) -> str:
    """Underlying per cToken, scaled by ``1e(18 + underlying decimals - 8)``."""
    return _read_market(ctx, asset, "exchangeRateCurrent", "exchangeRate")


def get_contract_address(ctx: ProtocolContext, asset: str) -> MarketAddresses:
    return MarketAddresses(
        address=ctx.address_of("c" + asset),
        underlying_address=ctx.address_of(asset),
    )
