"""Tests for open price feed lookups and cToken price conversion."""

import pytest

from lendkit.data.contracts import CERC20_ABI, PRICE_FEED_ABI
from lendkit.protocol.context import ProtocolContext
from lendkit.protocol.price_feed import get_price

# USD prices with 6 decimals, as the feed reports them
FEED_PRICES = {
    "ETH": 2_000_000_000,
    "BTC": 40_000_000_000,
    "DAI": 1_000_000,
    "USDC": 1_000_000,
    "USDT": 1_000_000,
}


@pytest.fixture
def priced(caller, mainnet):
    caller.responses["price"] = lambda address, args: FEED_PRICES[args[0]]
    # cDAI: 0.022 DAI (scale 1e28); cUSDC: 0.023 USDC (scale 1e16)
    rates = {
        mainnet["cDAI"]: 22 * 10**25,
        mainnet["cUSDC"]: 23 * 10**13,
    }
    caller.responses["exchangeRateCurrent"] = lambda address, args: rates[address]
    return caller


class TestUnderlyingPrices:
    def test_default_quote_is_usdt(self, ctx: ProtocolContext, priced, mainnet) -> None:
        assert get_price(ctx, "ETH") == pytest.approx(2_000.0)
        feed_calls = [c for c in priced.calls if c.method == "price"]
        assert [c.args for c in feed_calls] == [["ETH"], ["USDT"]]
        assert all(c.address == mainnet["PriceFeed"] for c in feed_calls)
        assert all(c.abi is PRICE_FEED_ABI for c in feed_calls)

    def test_explicit_quote(self, ctx: ProtocolContext, priced) -> None:
        assert get_price(ctx, "WBTC", "ETH") == pytest.approx(20.0)

    def test_wbtc_quoted_as_btc(self, ctx: ProtocolContext, priced) -> None:
        get_price(ctx, "WBTC")
        assert priced.calls[0].args == ["BTC"]

    def test_feed_only_symbol(self, ctx: ProtocolContext, priced) -> None:
        assert get_price(ctx, "BTC", "USDC") == pytest.approx(40_000.0)


class TestCTokenPrices:
    def test_ctoken_in_underlying_terms(self, ctx: ProtocolContext, priced) -> None:
        # 1 cDAI = 0.022 DAI, DAI = 1 USDT
        assert get_price(ctx, "cDAI") == pytest.approx(0.022)
        rate_call = next(c for c in priced.calls if c.method == "exchangeRateCurrent")
        assert rate_call.abi is CERC20_ABI

    def test_underlying_in_ctoken_terms(self, ctx: ProtocolContext, priced) -> None:
        # 1 DAI buys 1 / 0.022 cDAI
        assert get_price(ctx, "DAI", "cDAI") == pytest.approx(1 / 0.022)

    def test_ctoken_in_ctoken_terms(self, ctx: ProtocolContext, priced) -> None:
        # 1 cDAI = 0.022 USD, 1 cUSDC = 0.023 USD
        assert get_price(ctx, "cDAI", "cUSDC") == pytest.approx(0.022 / 0.023)

    def test_ctoken_against_volatile_asset(self, ctx: ProtocolContext, priced) -> None:
        assert get_price(ctx, "cUSDC", "ETH") == pytest.approx(0.023 / 2_000)


class TestValidation:
    def test_unsupported_asset(self, ctx: ProtocolContext, priced) -> None:
        with pytest.raises(ValueError, match=r"Compound \[getPrice\] \| Argument `asset` is not supported"):
            get_price(ctx, "DOGE")

    def test_unsupported_quote(self, ctx: ProtocolContext, priced) -> None:
        with pytest.raises(ValueError, match="Argument `inAsset` is not supported"):
            get_price(ctx, "ETH", "cBTC")

    def test_empty_asset(self, ctx: ProtocolContext, priced) -> None:
        with pytest.raises(ValueError, match="Argument `asset` must be a non-empty string"):
            get_price(ctx, "")

    def test_zero_quote_price(self, ctx: ProtocolContext, caller) -> None:
        caller.responses["price"] = lambda address, args: {"ETH": 2_000_000_000, "USDT": 0}[args[0]]
        with pytest.raises(ValueError, match=r"Compound \[getPrice\] \| Price feed returned no price for `USDT`"):
            get_price(ctx, "ETH")

    def test_no_calls_on_rejection(self, ctx: ProtocolContext, priced) -> None:
        with pytest.raises(ValueError):
            get_price(ctx, "ETH", "NOPE")
        assert priced.calls == []
