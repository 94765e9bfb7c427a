"""Static address and decimals tables for supported lending platforms."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from lendkit.data.constants import (
    CETH,
    COMPTROLLER,
    CTOKEN_DECIMALS,
    ETH,
    PRICE_FEED,
    USDT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Platform:
    """One Compound-style deployment: addresses per network plus decimals.

    Attributes:
        name: Registry key, e.g. ``"compound"``.
        addresses: ``network -> contract/asset name -> address``.
        decimals: Decimal precision per underlying and per cToken.
        underlyings: Supported underlying asset symbols.
        ctokens: Supported cToken symbols (underlying prefixed with ``c``).
        opf_assets: Symbols the open price feed can quote.
        native_ctoken: cToken of the chain's native currency.
        native_asset: The chain's native currency symbol.
        default_quote: Asset prices are expressed in when none is given.
    """

    name: str
    addresses: Mapping[str, Mapping[str, str]]
    decimals: Mapping[str, int]
    underlyings: tuple[str, ...]
    ctokens: tuple[str, ...]
    opf_assets: tuple[str, ...] = field(default_factory=tuple)
    native_ctoken: str = CETH
    native_asset: str = ETH
    default_quote: str = USDT

    @property
    def networks(self) -> tuple[str, ...]:
        return tuple(self.addresses)

    def addresses_for(self, network: str) -> Mapping[str, str]:
        """Address table for *network*; raises ``ValueError`` if unsupported."""
        table = self.addresses.get(network)
        if table is None:
            raise ValueError(
                f"Network `{network}` is not supported by platform `{self.name}`."
            )
        return table

    def address(self, network: str, name: str) -> str | None:
        """Address of contract or asset *name* on *network*, or ``None``."""
        return self.addresses_for(network).get(name)

    def is_native(self, ctoken_name: str) -> bool:
        return ctoken_name == self.native_ctoken


def _freeze(table: dict[str, dict[str, str]]) -> Mapping[str, Mapping[str, str]]:
    return MappingProxyType({net: MappingProxyType(dict(t)) for net, t in table.items()})


# ---------------------------------------------------------------------------
# Compound v2 (Ethereum mainnet)
# ---------------------------------------------------------------------------

_COMPOUND_UNDERLYINGS = (
    "ETH", "DAI", "USDC", "USDT", "WBTC", "BAT", "ZRX", "UNI", "COMP", "LINK", "TUSD", "AAVE",
)

_COMPOUND_ADDRESSES = {
    "mainnet": {
        COMPTROLLER: "0x3d9819210A31b4961b30EF54bE2aeD79B9c9Cd3B",
        PRICE_FEED: "0x50ce56A3239671Ab62f185704Caedf626352741e",
        # cTokens
        "cETH": "0x4Ddc2D193948926D02f9B1fE9e1daa0718270ED5",
        "cDAI": "0x5d3a536E4D6DbD6114cc1Ead35777bAB948E3643",
        "cUSDC": "0x39AA39c021dfbaE8faC545936693aC917d5E7563",
        "cUSDT": "0xf650C3d88D12dB855b8bf7D11Be6C55A4e07dCC9",
        "cWBTC": "0xccF4429DB6322D5C611ee964527D42E5d685DD6a",
        "cBAT": "0x6C8c6b02E7b2BE14d4fA6022Dfd6d75921D90E4E",
        "cZRX": "0xB3319f5D18Bc0D84dD1b4825Dcde5d5f7266d407",
        "cUNI": "0x35A18000230DA775CAc24873d00Ff85BccdeD550",
        "cCOMP": "0x70e36f6BF80a52b3B46b3aF8e106CC0ed743E8e4",
        "cLINK": "0xFAce851a4921ce59e912d19329929CE6da6EB0c7",
        "cTUSD": "0x12392F67bdf24faE0AF363c24aC620a2f67DAd86",
        "cAAVE": "0xe65cdB6479BaC1e22340E4E755fAE7E509EcD06c",
        # Underlyings
        "DAI": "0x6B175474E89094C44Da98b954EedeAC495271d0F",
        "USDC": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        "USDT": "0xdAC17F958D2ee523a2206206994597C13D831ec7",
        "WBTC": "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599",
        "BAT": "0x0D8775F648430679A709E98d2b0Cb6250d2887EF",
        "ZRX": "0xE41d2489571d322189246DaFA5ebDe1F4699F498",
        "UNI": "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984",
        "COMP": "0xc00e94Cb662C3520282E6f5717214004A7f26888",
        "LINK": "0x514910771AF9Ca656af840dff83E8264EcF986CA",
        "TUSD": "0x0000000000085d4780B73119b644AE5ecd22b376",
        "AAVE": "0x7Fc66500c84A76Ad7e9c93437bFc5Ac33E2DDaE9",
    },
}

_COMPOUND_DECIMALS = {
    "ETH": 18,
    "DAI": 18,
    "USDC": 6,
    "USDT": 6,
    "WBTC": 8,
    "BAT": 18,
    "ZRX": 18,
    "UNI": 18,
    "COMP": 18,
    "LINK": 18,
    "TUSD": 18,
    "AAVE": 18,
    **{f"c{symbol}": CTOKEN_DECIMALS for symbol in _COMPOUND_UNDERLYINGS},
}

COMPOUND = Platform(
    name="compound",
    addresses=_freeze(_COMPOUND_ADDRESSES),
    decimals=MappingProxyType(_COMPOUND_DECIMALS),
    underlyings=_COMPOUND_UNDERLYINGS,
    ctokens=tuple(f"c{symbol}" for symbol in _COMPOUND_UNDERLYINGS),
    opf_assets=(
        "BTC", "ETH", "DAI", "BAT", "KNC", "LINK", "COMP", "USDC", "USDT",
        "WBTC", "ZRX", "UNI", "TUSD", "AAVE", "SUSHI", "YFI", "MKR",
    ),
)

# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_PLATFORMS: dict[str, Platform] = {COMPOUND.name: COMPOUND}


def get_platform(name: str) -> Platform:
    """Look up a registered platform by name."""
    try:
        return _PLATFORMS[name]
    except KeyError:
        raise ValueError(
            f"Unknown platform `{name}`; available: {', '.join(sorted(_PLATFORMS))}"
        ) from None


def register_platform(platform: Platform, replace: bool = False) -> None:
    """Add a Compound fork to the registry.

    Meant to be called at start-up, before any client is built.
    """
    if platform.name in _PLATFORMS and not replace:
        raise ValueError(f"Platform `{platform.name}` is already registered")
    missing = [t for t in platform.ctokens if t not in platform.decimals]
    if missing:
        raise ValueError(f"Platform `{platform.name}` has no decimals for {missing}")
    _PLATFORMS[platform.name] = platform
    logger.info("Registered platform %s (networks: %s)", platform.name, platform.networks)
