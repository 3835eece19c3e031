"""
Derived-state rules.

Both functions are pure: callers read the current persisted value, call the
rule and write the result back in the same operation.
"""

# Highest threshold first
TIER_THRESHOLDS = (
    (5000, "platinum"),
    (2000, "gold"),
    (500, "silver"),
)
DEFAULT_TIER = "bronze"

LISTED = "listed"
NOT_LISTED = "notListed"


def resolve_membership_tier(points: int) -> str:
    """Map a loyalty point balance to a membership tier.

    Negative balances (deductions are not floor-clamped) resolve to bronze.
    """
    for threshold, tier in TIER_THRESHOLDS:
        if points >= threshold:
            return tier
    return DEFAULT_TIER


def resolve_listing_status(active_barber_count: int) -> str:
    """A salon is listed while it has at least one active barber."""
    return LISTED if active_barber_count > 0 else NOT_LISTED
