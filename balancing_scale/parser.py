"""
Scale tree parsing and validation.

Each meaningful input line declares one scale::

    <scale_name> <left_pan> <right_pan>

Fields are separated by whitespace or commas. A pan starting with a digit is a
mass, a pan starting with a letter names another scale. Empty lines and lines
starting with ``#`` are skipped.

The root is found by reference counting: every declaration adds one to the
name's counter and every pan reference subtracts one. In a well-formed tree
every non-root scale nets to zero and the root nets to +1, so a single
non-zero counter equal to +1 identifies the root. Dangling references, shared
sub-scales and forests leave a different pattern and are rejected. A cycle
detached from the root still nets to zero, so every scale is also checked to
be reachable from the root.
"""
import logging
import re
import string
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Tuple

from balancing_scale.config import COMMENT_PREFIX, FIELD_SEPARATOR, MAX_MASS
from balancing_scale.errors import (
    AmbiguousRootError,
    DisconnectedScalesError,
    DuplicateScaleError,
    EmptyTreeError,
    InvalidTokenError,
    MassOverflowError,
    NotARootError,
    ScaleSyntaxError,
)
from balancing_scale.models import Mass, PanContent, Scale, ScaleRef, ScaleTree

logger = logging.getLogger(__name__)

_LEADING_DIGITS = re.compile(r"[0-9]+")


def parse_pan(token: str, line_number: Optional[int] = None, line: Optional[str] = None) -> PanContent:
    """Classify a pan token by its first character.

    A mass is read from the leading run of digits, so ``12kg`` weighs 12.
    """
    first = token[0]
    if first in string.digits:
        value = int(_LEADING_DIGITS.match(token).group())
        if value > MAX_MASS:
            raise MassOverflowError(f"mass {token} is out of range", line_number, line)
        return Mass(value)
    if first in string.ascii_letters:
        return ScaleRef(token)
    raise InvalidTokenError("invalid mass or scale name", line_number, line)


def parse_line(line: str, line_number: Optional[int] = None) -> Optional[Scale]:
    """Parse one input line, returning None for blank and comment lines."""
    line = line.rstrip("\r\n")
    if not line or line.startswith(COMMENT_PREFIX):
        return None

    fields = line.replace(FIELD_SEPARATOR, " ").split()
    if not fields:
        raise ScaleSyntaxError("failed to read scale name", line_number, line)
    if len(fields) < 3:
        raise ScaleSyntaxError("failed to read left and/or right pan for scale", line_number, line)
    if len(fields) > 3:
        logger.warning("Ignoring extra fields on line %s: %s", line_number, fields[3:])

    name, left, right = fields[:3]
    return Scale(
        name,
        parse_pan(left, line_number, line),
        parse_pan(right, line_number, line),
    )


def find_root(link_counts: Dict[str, int]) -> str:
    """Return the only name with a non-zero counter, which must be +1."""
    ill_formed: List[Tuple[str, int]] = [
        (name, count) for name, count in link_counts.items() if count != 0
    ]
    if len(ill_formed) != 1:
        raise AmbiguousRootError(name for name, _ in ill_formed)

    name, count = ill_formed[0]
    if count != 1:
        raise NotARootError(name, count)
    return name


def reachable_from(scales: Dict[str, Scale], root: str) -> Set[str]:
    """Names of the scales hanging, directly or not, below ``root``."""
    seen = {root}
    stack = [root]
    while stack:
        scale = scales[stack.pop()]
        for pan in (scale.left, scale.right):
            if isinstance(pan, ScaleRef) and pan.name in scales and pan.name not in seen:
                seen.add(pan.name)
                stack.append(pan.name)
    return seen


def build_tree(lines: Iterable[str], source: str = "<input>") -> ScaleTree:
    """Build a validated ScaleTree from input lines.

    Raises a ``ScaleError`` subclass describing the first problem found; no
    partial tree is ever returned.
    """
    scales: Dict[str, Scale] = {}
    link_counts: Dict[str, int] = defaultdict(int)

    for line_number, line in enumerate(lines, start=1):
        scale = parse_line(line, line_number)
        if scale is None:
            logger.debug("Skipping line %d of %s", line_number, source)
            continue

        link_counts[scale.name] += 1
        for pan in (scale.left, scale.right):
            if isinstance(pan, ScaleRef):
                link_counts[pan.name] -= 1

        if scale.name in scales:
            raise DuplicateScaleError(scale.name, line_number, line.rstrip("\r\n"))
        scales[scale.name] = scale

    if not scales:
        raise EmptyTreeError(f"no scale tree is described in {source}")

    root = find_root(link_counts)
    unreached = set(scales) - reachable_from(scales, root)
    if unreached:
        raise DisconnectedScalesError(root, unreached)
    logger.debug("Parsed %d scales from %s, root is %s", len(scales), source, root)
    return ScaleTree(scales, root)
