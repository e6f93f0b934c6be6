"""
Export Freight Surcharges Package

Exports all surcharge classes and helpers.

Surcharges with the same exclusivity_group compete - only the highest
priority (lowest number) that matches wins.

Usage:
    from carriers.export_freight.surcharges import ALL
"""

from shared.surcharges import Surcharge
from .delivery import DELIVERY_4W, DELIVERY_6W
from .clearance import CLEARANCE


ALL: list[type[Surcharge]] = [DELIVERY_4W, DELIVERY_6W, CLEARANCE]

DELIVERY: list[type[Surcharge]] = [DELIVERY_4W, DELIVERY_6W]


# =============================================================================
# HELPERS
# =============================================================================

def get_exclusivity_group(group: str) -> list[type[Surcharge]]:
    """Get surcharges in an exclusivity group, sorted by priority (lowest first)."""
    return sorted(
        [s for s in ALL if s.exclusivity_group == group],
        key=lambda s: s.priority
    )


def get_unique_exclusivity_groups(surcharges: list) -> set[str]:
    """Get unique exclusivity group names from a list of surcharges."""
    return {s.exclusivity_group for s in surcharges if s.exclusivity_group is not None}


def get_delivery_surcharge(vehicle: str | None) -> type[Surcharge] | None:
    """Delivery surcharge class for a vehicle key, or None."""
    for s in DELIVERY:
        if s.VEHICLE == vehicle:
            return s
    return None


# =============================================================================
# VALIDATION
# =============================================================================

def validate_surcharges() -> None:
    """
    Validate surcharge configuration integrity.

    Raises ValueError if any configuration issues are found.
    Called at import time to fail fast on configuration errors.
    """
    errors = []

    names = [s.name for s in ALL]
    for name in {n for n in names if names.count(n) > 1}:
        errors.append(f"{name}: duplicate surcharge name")

    for s in ALL:
        # Check exclusivity_group surcharges have priority defined
        if s.exclusivity_group is not None and s.priority is None:
            errors.append(f"{s.name}: exclusivity_group '{s.exclusivity_group}' requires priority")

        if not 0.0 <= s.discount <= 1.0:
            errors.append(f"{s.name}: discount must be between 0 and 1, got {s.discount}")

    for group_name in get_unique_exclusivity_groups(ALL):
        priorities = [s.priority for s in get_exclusivity_group(group_name)]
        if len(priorities) != len(set(priorities)):
            errors.append(f"exclusivity_group '{group_name}': duplicate priorities {priorities}")

    if errors:
        raise ValueError("Surcharge configuration errors:\n  " + "\n  ".join(errors))


# Run validation at import time
validate_surcharges()

__all__ = [
    # Base
    "Surcharge",
    # Surcharge classes
    "CLEARANCE",
    "DELIVERY_4W",
    "DELIVERY_6W",
    # Lists
    "ALL",
    "DELIVERY",
    # Helpers
    "get_delivery_surcharge",
    "get_exclusivity_group",
    "get_unique_exclusivity_groups",
    "validate_surcharges",
]
