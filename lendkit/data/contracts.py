"""Minimal ABIs for Compound-style money market contracts."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# cToken view functions (shared by cEther and cErc20)
# ---------------------------------------------------------------------------


def _view(name: str, inputs: list[dict] | None = None, output: str = "uint256") -> dict:
    return {
        "inputs": inputs or [],
        "name": name,
        "outputs": [{"name": "", "type": output}],
        "stateMutability": "view",
        "type": "function",
    }


def _nonpayable(name: str, inputs: list[dict], output: str = "uint256") -> dict:
    return {
        "inputs": inputs,
        "name": name,
        "outputs": [{"name": "", "type": output}],
        "stateMutability": "nonpayable",
        "type": "function",
    }


def _payable(name: str, inputs: list[dict]) -> dict:
    return {
        "inputs": inputs,
        "name": name,
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    }


_CTOKEN_VIEWS = [
    _view("totalSupply"),
    _view("supplyRatePerBlock"),
    _view("borrowRatePerBlock"),
    _view("reserveFactorMantissa"),
    _view("totalReserves"),
    _view("getCash"),
    # Accrue interest before returning, so nonpayable on-chain; read via eth_call
    _nonpayable("totalBorrowsCurrent", []),
    _nonpayable("exchangeRateCurrent", []),
]

_CTOKEN_COMMON_WRITES = [
    _nonpayable("redeem", [{"name": "redeemTokens", "type": "uint256"}]),
    _nonpayable("redeemUnderlying", [{"name": "redeemAmount", "type": "uint256"}]),
    _nonpayable("borrow", [{"name": "borrowAmount", "type": "uint256"}]),
]

# ---------------------------------------------------------------------------
# cEther: native currency market, amounts travel as msg.value
# ---------------------------------------------------------------------------

CETHER_ABI = _CTOKEN_VIEWS + _CTOKEN_COMMON_WRITES + [
    _payable("mint", []),
    _payable("repayBorrow", []),
    _payable("repayBorrowBehalf", [{"name": "borrower", "type": "address"}]),
]

# ---------------------------------------------------------------------------
# cErc20: token markets, amounts travel as arguments
# ---------------------------------------------------------------------------

CERC20_ABI = _CTOKEN_VIEWS + _CTOKEN_COMMON_WRITES + [
    _nonpayable("mint", [{"name": "mintAmount", "type": "uint256"}]),
    _nonpayable("repayBorrow", [{"name": "repayAmount", "type": "uint256"}]),
    _nonpayable(
        "repayBorrowBehalf",
        [
            {"name": "borrower", "type": "address"},
            {"name": "repayAmount", "type": "uint256"},
        ],
    ),
]

# ---------------------------------------------------------------------------
# ERC-20 underlying tokens
# ---------------------------------------------------------------------------

ERC20_ABI = [
    _nonpayable(
        "approve",
        [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        output="bool",
    ),
    _view("balanceOf", [{"name": "owner", "type": "address"}]),
]

# ---------------------------------------------------------------------------
# Comptroller
# ---------------------------------------------------------------------------

COMPTROLLER_ABI = [
    _nonpayable(
        "enterMarkets",
        [{"name": "cTokens", "type": "address[]"}],
        output="uint256[]",
    ),
    _nonpayable("exitMarket", [{"name": "cTokenAddress", "type": "address"}]),
    _view("getAssetsIn", [{"name": "account", "type": "address"}], output="address[]"),
    _view("getAllMarkets", output="address[]"),
    {
        "inputs": [{"name": "cToken", "type": "address"}],
        "name": "markets",
        "outputs": [
            {"name": "isListed", "type": "bool"},
            {"name": "collateralFactorMantissa", "type": "uint256"},
            {"name": "isComped", "type": "bool"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
]

# ---------------------------------------------------------------------------
# Open price feed (UniswapAnchoredView), USD prices with 6 decimals
# ---------------------------------------------------------------------------

PRICE_FEED_ABI = [
    _view("price", [{"name": "symbol", "type": "string"}]),
]
