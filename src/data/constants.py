"""Asset identifiers and protocol constants."""

# Staked asset symbols
STK_AAVE = "stkAAVE"
STK_BPT = "stkABPT"

# APY fixed-point scale: 10_000 == 100%
APY_PRECISION = 10_000
SECONDS_PER_YEAR = 365 * 86400

# Views are published in the EVM word domain
UINT256_MAX = 2**256 - 1

# Decimals
TOKEN_DECIMALS = 18
PRICE_FEED_DECIMALS = 18  # X/ETH Chainlink feeds
REFERENCE_FEED_DECIMALS = 8  # ETH/USD Chainlink feed
