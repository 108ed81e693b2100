"""Pool fee tiers and their tick spacings."""

# Fee tiers in parts-per-million (fee = units / 1,000,000, e.g., 3000 = 0.3%)
FEE_LOW = 500  # 0.05% - stable pairs
FEE_MEDIUM = 3000  # 0.30% - most pairs
FEE_HIGH = 10000  # 1.00% - exotic pairs

FEE_TIERS = [FEE_LOW, FEE_MEDIUM, FEE_HIGH]

# Tick spacing per fee tier
TICK_SPACING = {
    FEE_LOW: 10,
    FEE_MEDIUM: 60,
    FEE_HIGH: 200,
}

FEE_TIER_LABELS = {
    FEE_LOW: "0.05%",
    FEE_MEDIUM: "0.3%",
    FEE_HIGH: "1%",
}

__all__ = [
    "FEE_LOW",
    "FEE_MEDIUM",
    "FEE_HIGH",
    "FEE_TIERS",
    "TICK_SPACING",
    "FEE_TIER_LABELS",
]
