"""Scale tree data types."""
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, NamedTuple, Union

from balancing_scale.errors import UnknownRootError


class Mass(NamedTuple):
    """A fixed, non-negative mass sitting on a pan."""
    value: int


class ScaleRef(NamedTuple):
    """A pan holding the nested scale called ``name``."""
    name: str


PanContent = Union[Mass, ScaleRef]


class Scale(NamedTuple):
    name: str
    left: PanContent
    right: PanContent


class BalanceMasses(NamedTuple):
    """Mass to add to each pan of one scale."""
    left: int
    right: int


class ScaleTree(Mapping[str, Scale]):
    """Read-only table of scales keyed by name, with the root scale's name.

    Pan references are resolved by looking names up in this table. Instances
    are normally created by ``balancing_scale.parser.build_tree``, which checks
    that the scales really form a single rooted tree.
    """

    def __init__(self, scales: Dict[str, Scale], root: str):
        if root not in scales:
            raise UnknownRootError(root)
        self._scales = MappingProxyType(dict(scales))
        self.root = root

    def __getitem__(self, name: str) -> Scale:
        return self._scales[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._scales)

    def __len__(self) -> int:
        return len(self._scales)

    def __repr__(self) -> str:
        return f"ScaleTree(root={self.root!r}, scales={len(self)})"


class BalanceResult(Mapping[str, BalanceMasses]):
    """Balancing masses per scale, iterated in ascending name order."""

    def __init__(self, masses: Dict[str, BalanceMasses]):
        self._masses = MappingProxyType(dict(masses))

    def __getitem__(self, name: str) -> BalanceMasses:
        return self._masses[name]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._masses))

    def __len__(self) -> int:
        return len(self._masses)

    def __repr__(self) -> str:
        return f"BalanceResult({dict(self.items())!r})"
