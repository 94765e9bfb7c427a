"""Asset prices from the protocol's open price feed."""

from __future__ import annotations

from dataclasses import dataclass

from lendkit.data.constants import CTOKEN_DECIMALS, MANTISSA_DECIMALS, PRICE_FEED
from lendkit.data.contracts import PRICE_FEED_ABI
from lendkit.protocol.amounts import error_prefix
from lendkit.protocol.context import ProtocolContext
from lendkit.protocol.ctoken import ctoken_abi

# The open price feed reports BTC, not WBTC
_FEED_SYMBOLS = {"WBTC": "BTC"}


@dataclass(frozen=True)
class _PricedAsset:
    is_ctoken: bool
    ctoken_name: str
    ctoken_address: str | None
    feed_symbol: str
    underlying_decimals: int | None


def _validate_asset(
    ctx: ProtocolContext, asset: str, argument: str, prefix: str
) -> _PricedAsset:
    if not isinstance(asset, str) or not asset:
        raise ValueError(prefix + f"Argument `{argument}` must be a non-empty string.")

    platform = ctx.platform
    is_ctoken = asset[0] == "c"
    ctoken_name = asset if is_ctoken else "c" + asset
    underlying = asset[1:] if is_ctoken else asset

    listed = ctoken_name in platform.ctokens and underlying in platform.underlyings
    # A bare symbol the feed quotes (e.g. BTC) needs no market
    if not listed and (is_ctoken or underlying not in platform.opf_assets):
        raise ValueError(prefix + f"Argument `{argument}` is not supported.")

    ctoken_address = ctx.address_of(ctoken_name)
    if is_ctoken and not ctoken_address:
        raise ValueError(
            prefix + f"Market `{ctoken_name}` is not deployed on {ctx.network_name()}."
        )

    return _PricedAsset(
        is_ctoken=is_ctoken,
        ctoken_name=ctoken_name,
        ctoken_address=ctoken_address,
        feed_symbol=_FEED_SYMBOLS.get(underlying, underlying),
        underlying_decimals=platform.decimals.get(underlying),
    )


def _ctoken_in_underlying(ctx: ProtocolContext, asset: _PricedAsset) -> float:
    """Underlying units one cToken is worth."""
    rate = ctx.caller.read(
        asset.ctoken_address, ctoken_abi(ctx, asset.ctoken_name), "exchangeRateCurrent"
    )
    scale = MANTISSA_DECIMALS + int(asset.underlying_decimals) - CTOKEN_DECIMALS
    return int(rate) / 10**scale


def get_price(ctx: ProtocolContext, asset: str, in_asset: str | None = None) -> float:
    """Price of one *asset* expressed in *in_asset*.

    Args:
        asset: Underlying, cToken or price-feed symbol to price.
        in_asset: Symbol to express the price in; defaults to the
            platform's quote asset (USDT for Compound).

    Returns:
        How many *in_asset* one *asset* is worth.
    """
    prefix = error_prefix("getPrice")
    if not in_asset:
        in_asset = ctx.platform.default_quote

    base = _validate_asset(ctx, asset, "asset", prefix)
    quote = _validate_asset(ctx, in_asset, "inAsset", prefix)

    feed_address = ctx.address_of(PRICE_FEED)
    if not feed_address:
        raise ValueError(prefix + f"No PriceFeed configured on {ctx.network_name()}.")

    base_price = ctx.caller.read(feed_address, PRICE_FEED_ABI, "price", [base.feed_symbol])
    quote_price = ctx.caller.read(feed_address, PRICE_FEED_ABI, "price", [quote.feed_symbol])

    if not int(quote_price):
        raise ValueError(prefix + f"Price feed returned no price for `{quote.feed_symbol}`.")

    result = int(base_price) / int(quote_price)
    # cToken legs: multiply by the base's underlying per cToken, divide by the quote's
    if base.is_ctoken:
        result *= _ctoken_in_underlying(ctx, base)
    if quote.is_ctoken:
        result /= _ctoken_in_underlying(ctx, quote)
    return result
