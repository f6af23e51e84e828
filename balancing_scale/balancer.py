"""
Bottom-up balancing of a scale tree.

Every scale is evaluated after both of its pans. A pan weighs its mass, or the
effective weight of the nested scale once that scale has been balanced::

    effective_weight = 2 * max(left_weight, right_weight) + 1

which is what a balanced scale weighs in total: both pans at the heavier
side's weight plus one unit for the scale itself.
"""
import logging
from typing import Dict, List, Optional, Set, Tuple

from balancing_scale.errors import (
    DisconnectedScalesError,
    DuplicateResultError,
    UnknownScaleError,
)
from balancing_scale.models import (
    BalanceMasses,
    BalanceResult,
    Mass,
    PanContent,
    Scale,
    ScaleRef,
    ScaleTree,
)

logger = logging.getLogger(__name__)


def balance_masses(left_weight: int, right_weight: int) -> BalanceMasses:
    """Mass to add to each pan so both sides weigh the same."""
    return BalanceMasses(
        left=max(0, right_weight - left_weight),
        right=max(0, left_weight - right_weight),
    )


def effective_weight(left_weight: int, right_weight: int) -> int:
    return 2 * max(left_weight, right_weight) + 1


def _lookup(tree: ScaleTree, name: str) -> Scale:
    try:
        return tree[name]
    except KeyError:
        raise UnknownScaleError(name) from None


def balance(tree: ScaleTree, root: Optional[str] = None) -> BalanceResult:
    """Compute the balancing masses for every scale below ``root``.

    ``root`` defaults to the tree's own root. The traversal keeps its own
    stack, so tree height is not limited by the interpreter's recursion limit.

    Raises:
        UnknownScaleError: a pan references a scale missing from the tree.
        DuplicateResultError: a scale is reached twice.
        DisconnectedScalesError: balancing from the tree's root left scales
            unvisited.
    """
    if root is None:
        root = tree.root

    masses: Dict[str, BalanceMasses] = {}
    weights: Dict[str, int] = {}
    entered: Set[str] = set()

    def pan_weight(pan: PanContent) -> int:
        if isinstance(pan, Mass):
            return pan.value
        return weights[pan.name]

    # (scale, children_done) frames: a scale is finished on its second visit
    stack: List[Tuple[Scale, bool]] = [(_lookup(tree, root), False)]
    entered.add(root)
    while stack:
        scale, children_done = stack.pop()
        if children_done:
            left_weight = pan_weight(scale.left)
            right_weight = pan_weight(scale.right)
            masses[scale.name] = balance_masses(left_weight, right_weight)
            weights[scale.name] = effective_weight(left_weight, right_weight)
            logger.debug(
                "Scale %s: left=%d right=%d -> add %s",
                scale.name, left_weight, right_weight, masses[scale.name],
            )
            continue

        stack.append((scale, True))
        # right pushed first so the left pan is evaluated first
        for pan in (scale.right, scale.left):
            if isinstance(pan, ScaleRef):
                if pan.name in entered:
                    raise DuplicateResultError(pan.name)
                entered.add(pan.name)
                stack.append((_lookup(tree, pan.name), False))

    if root == tree.root and len(masses) != len(tree):
        raise DisconnectedScalesError(root, set(tree) - set(masses))
    return BalanceResult(masses)
