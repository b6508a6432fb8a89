"""Staffing requirements derived from predicted demand."""

from __future__ import annotations

import math
from typing import Dict


# Staff per customer for each slot. Dict order is the order positions are filled in.
STAFF_RATIOS: Dict[str, Dict[str, float]] = {
    "morning": {"Server": 0.15, "Line Cook": 0.08, "Host": 0.05},
    "afternoon": {"Server": 0.18, "Line Cook": 0.10, "Host": 0.06},
    "evening": {"Server": 0.22, "Line Cook": 0.12, "Host": 0.08},
}

CUSTOMERS_PER_STAFF = 15


def compute_staffing_needs(demand: int, time_slot: str) -> Dict[str, int]:
    """
    Build position requirements for one slot.

    Args:
        demand: Predicted customer count for the slot
        time_slot: "morning", "afternoon" or "evening"

    Returns:
        Dict of position -> headcount, at least 1 per listed position.
        Evening slots always include one Manager.
    """
    if time_slot not in STAFF_RATIOS:
        raise ValueError(f"Unknown time slot: {time_slot}")

    needs = {
        position: max(1, math.ceil(demand * ratio))
        for position, ratio in STAFF_RATIOS[time_slot].items()
    }

    if time_slot == "evening":
        needs["Manager"] = 1

    return needs


def recommended_staff(demand: int, customers_per_staff: int = CUSTOMERS_PER_STAFF) -> int:
    """Total headcount for a demand figure: ceil(demand / customers_per_staff)."""
    return math.ceil(demand / customers_per_staff)
