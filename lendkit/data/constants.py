"""Asset identifiers and protocol constants."""

# Native chain currency and its cToken
ETH = "ETH"
CETH = "cETH"

# Default quote asset for price lookups
USDT = "USDT"

# Well-known protocol contracts in the address table
COMPTROLLER = "Comptroller"
PRICE_FEED = "PriceFeed"

# cTokens always carry 8 decimals
CTOKEN_DECIMALS = 8

# Exchange rates and per-block rates are scaled by 1e18
MANTISSA_DECIMALS = 18
ETH_MANTISSA = 10**MANTISSA_DECIMALS

# Post-merge block cadence (12s slots)
BLOCKS_PER_DAY = 7200
DAYS_PER_YEAR = 365

DEFAULT_NETWORK = "mainnet"

# chain id -> network name used as the address table key
CHAIN_NAMES: dict[int, str] = {
    1: "mainnet",
    3: "ropsten",
    4: "rinkeby",
    5: "goerli",
    42: "kovan",
    11155111: "sepolia",
}
