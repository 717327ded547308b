"""Contract addresses and minimal ABIs for staked token data fetching."""

# ---------------------------------------------------------------------------
# Staked token addresses (Ethereum mainnet)
# ---------------------------------------------------------------------------
STAKED_TOKEN_ADDRESSES: dict[str, str] = {
    "stkAAVE": "0x4da27a545c0c5B758a6BA100e3a049001de870f5",
    "stkABPT": "0xa1116930326D21fB917d5A27F1E9943A9595fb47",
}

# ---------------------------------------------------------------------------
# Chainlink
# ---------------------------------------------------------------------------
CHAINLINK_AAVE_ETH_FEED = "0x6Df09E975c830ECae5bd4eD9d90f3A95a4f88012"
CHAINLINK_ETH_USD_FEED = "0x5f4eC3Df9cbd43714FE2740f5E3616155c5b8419"

# ---------------------------------------------------------------------------
# Minimal ABIs: only the view functions we call
# ---------------------------------------------------------------------------

ERC20_ABI = [
    {
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]

STAKED_TOKEN_ABI = ERC20_ABI + [
    {
        "inputs": [{"name": "shares", "type": "uint256"}],
        "name": "previewRedeem",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getCooldownSeconds",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "UNSTAKE_WINDOW",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "DISTRIBUTION_END",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "STAKED_TOKEN",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "asset", "type": "address"}],
        "name": "assets",
        "outputs": [
            {"name": "emissionPerSecond", "type": "uint128"},
            {"name": "lastUpdateTimestamp", "type": "uint128"},
            {"name": "index", "type": "uint256"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "staker", "type": "address"}],
        "name": "getTotalRewardsBalance",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "staker", "type": "address"}],
        "name": "stakersCooldowns",
        "outputs": [
            {"name": "timestamp", "type": "uint40"},
            {"name": "amount", "type": "uint216"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
]

CHAINLINK_FEED_ABI = [
    {
        "inputs": [],
        "name": "latestAnswer",
        "outputs": [{"name": "", "type": "int256"}],
        "stateMutability": "view",
        "type": "function",
    },
]
