"""Per-market overview table."""

from __future__ import annotations

import logging
from typing import Sequence

import pandas as pd

from lendkit.data.constants import (
    BLOCKS_PER_DAY,
    CTOKEN_DECIMALS,
    DAYS_PER_YEAR,
    ETH_MANTISSA,
    MANTISSA_DECIMALS,
)
from lendkit.protocol import ctoken
from lendkit.protocol.amounts import from_mantissa
from lendkit.protocol.context import ProtocolContext

logger = logging.getLogger(__name__)

SNAPSHOT_COLUMNS = [
    "asset",
    "ctoken",
    "address",
    "supply_rate",
    "borrow_rate",
    "supply_apy",
    "borrow_apy",
    "total_supply",
    "total_borrows",
    "cash",
    "reserves",
    "exchange_rate",
]


def rate_to_apy(rate_per_block: int | str, blocks_per_day: int = BLOCKS_PER_DAY) -> float:
    """Annualise a per-block rate (1e18-scaled) with daily compounding.

    APY = (rate / 1e18 * blocks_per_day + 1) ** 365 - 1
    """
    daily = int(rate_per_block) / ETH_MANTISSA * blocks_per_day
    return (daily + 1.0) ** DAYS_PER_YEAR - 1.0


def market_snapshot(
    ctx: ProtocolContext,
    assets: Sequence[str] | None = None,
) -> pd.DataFrame:
    """Read rates and balances for each market into a DataFrame.

    Args:
        assets: Underlying symbols to include; defaults to every market
            deployed on the current network.

    Returns:
        DataFrame with ``SNAPSHOT_COLUMNS``. Balances are in natural
        units (cTokens for ``total_supply``, underlying for the rest).
    """
    if assets is None:
        assets = [a for a in ctx.platform.underlyings if ctx.address_of("c" + a)]

    rows = []
    for asset in assets:
        decimals = ctx.decimals_of(asset)
        supply_rate = ctoken.supply_rate(ctx, asset)
        borrow_rate = ctoken.borrow_rate(ctx, asset)
        rate_scale = MANTISSA_DECIMALS + decimals - CTOKEN_DECIMALS
        rows.append(
            {
                "asset": asset,
                "ctoken": "c" + asset,
                "address": ctx.address_of("c" + asset),
                "supply_rate": int(supply_rate),
                "borrow_rate": int(borrow_rate),
                "supply_apy": rate_to_apy(supply_rate),
                "borrow_apy": rate_to_apy(borrow_rate),
                "total_supply": float(from_mantissa(ctoken.total_supply(ctx, asset), CTOKEN_DECIMALS)),
                "total_borrows": float(from_mantissa(ctoken.total_borrows(ctx, asset), decimals)),
                "cash": float(from_mantissa(ctoken.get_cash(ctx, asset), decimals)),
                "reserves": float(from_mantissa(ctoken.total_reserves(ctx, asset), decimals)),
                "exchange_rate": float(from_mantissa(ctoken.exchange_rate(ctx, asset), rate_scale)),
            }
        )

    logger.info("Snapshot of %d markets on %s", len(rows), ctx.network_name())
    return pd.DataFrame(rows, columns=SNAPSHOT_COLUMNS)
