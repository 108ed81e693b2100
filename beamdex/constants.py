"""Protocol constants for the BeamDEX client.

Centralizes fixed-point scales, tick bounds and well-known pseudo-addresses.
"""

# Q64.96 fixed-point scale: value * 2^96
Q96_RESOLUTION = 96
Q96 = 1 << Q96_RESOLUTION

# Tick bounds enforced by the pool contract (price = 1.0001^tick)
MIN_TICK = -887272
MAX_TICK = 887272
TICK_BASE = 1.0001

# Full-range position boundaries used by the liquidity screens.
# Fixed regardless of tick spacing (see DESIGN.md open questions).
FULL_RANGE_TICK_LOWER = -887220
FULL_RANGE_TICK_UPPER = 887220

# Fees are expressed in parts-per-million (3000 = 0.3%)
FEE_DENOMINATOR = 1_000_000

# Display cap for price impact on degenerate inputs
MAX_PRICE_IMPACT_PCT = 99

# Native coin pseudo-token understood by the order managers
NATIVE_MAS = "NATIVE_MAS"
NATIVE_MAS_SYMBOL = "MAS"
NATIVE_MAS_DECIMALS = 9

# Chain period length; recurring orders are scheduled in periods
SECONDS_PER_PERIOD = 16

# Grid order bounds accepted by the client before submission
GRID_MIN_LEVELS = 2
GRID_MAX_LEVELS = 100

# Order book refresh cadence observed in the web client
DEFAULT_POLL_INTERVAL = 30.0

UINT256_MAX = 2**256 - 1

# sqrt price bounds of the pool (exclusive); swaps default to one step inside
MIN_SQRT_RATIO = 4295128739
MAX_SQRT_RATIO = 1461446703485210103287273052203988822378723970342

UINT128_MAX = 2**128 - 1
