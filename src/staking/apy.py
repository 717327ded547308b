"""Annualized yield from a reward emission rate.

APY = emission_per_second * SECONDS_PER_YEAR * APY_PRECISION / value_base

Python integers are arbitrary precision, so the intermediate product is
exact for any uint256 input; only the final result is range-checked.
"""

from src.data.constants import APY_PRECISION, SECONDS_PER_YEAR, UINT256_MAX
from src.data.errors import ArithmeticOverflow


def compute_apy(distribution_per_second: int, value_base: int) -> int:
    """Compute the annualized yield rate in APY_PRECISION fixed point.

    Args:
        distribution_per_second: Rewards emitted per second (already
            value-weighted for pool-backed assets).
        value_base: Amount the rewards are spread over (total supply, or
            total supply times staked price).

    Returns:
        Rate truncated towards zero, where 10_000 == 100%.  Zero when
        ``value_base`` is zero.
    """
    if distribution_per_second < 0 or value_base < 0:
        raise ValueError("APY inputs must be non-negative")
    if value_base == 0:
        return 0

    rate = distribution_per_second * SECONDS_PER_YEAR * APY_PRECISION // value_base
    if rate > UINT256_MAX:
        raise ArithmeticOverflow(f"APY {rate} exceeds the uint256 domain")
    return rate
