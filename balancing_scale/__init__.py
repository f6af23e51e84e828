"""Balance trees of two-pan scales."""
from balancing_scale.balancer import balance
from balancing_scale.errors import ScaleError
from balancing_scale.models import (
    BalanceMasses,
    BalanceResult,
    Mass,
    PanContent,
    Scale,
    ScaleRef,
    ScaleTree,
)
from balancing_scale.parser import build_tree

__all__ = [
    "BalanceMasses",
    "BalanceResult",
    "Mass",
    "PanContent",
    "Scale",
    "ScaleError",
    "ScaleRef",
    "ScaleTree",
    "balance",
    "build_tree",
]
