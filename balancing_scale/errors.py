"""Exceptions raised while reading, validating and balancing scale trees."""
from typing import Iterable, Optional


class ScaleError(Exception):
    """Base class for every balancing_scale failure."""


class ScaleInputError(ScaleError):
    """The input file could not be read."""


class LineError(ScaleError):
    """A problem tied to one input line."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        if line is not None:
            message = f"{message}: {line!r}"
        super().__init__(message)


class ScaleSyntaxError(LineError):
    """A line is missing its scale name or one of its pans."""


class InvalidTokenError(LineError):
    """A pan token is neither a mass nor a scale name."""


class MassOverflowError(InvalidTokenError):
    """A mass does not fit in the unsigned 64-bit range."""


class ScaleTreeError(ScaleError):
    """The declared scales do not form a single rooted tree."""


class DuplicateScaleError(ScaleTreeError, LineError):
    def __init__(self, name: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.name = name
        LineError.__init__(self, f"duplicate scale name found: {name}", line_number, line)


class EmptyTreeError(ScaleTreeError):
    pass


class AmbiguousRootError(ScaleTreeError):
    """Zero or several scales have a non-zero reference count."""

    def __init__(self, names: Iterable[str]):
        self.names = sorted(names)
        listed = " ".join(self.names) if self.names else "<none>"
        super().__init__(f"there are multiple or zero ill-formed scales: {listed}")


class NotARootError(ScaleTreeError):
    """The only ill-formed scale is not declared once and referenced never."""

    def __init__(self, name: str, count: int):
        self.name = name
        self.count = count
        super().__init__(
            f"the ill-formed scale is not a root scale: {name} (reference balance {count:+d})"
        )


class BalanceError(ScaleError):
    """Internal invariant violated while balancing a validated tree."""


class UnknownScaleError(BalanceError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"failed to find scale with name {name} in the scale tree")


class DuplicateResultError(BalanceError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unexpected duplicate scale name while balancing: {name}")


class DisconnectedScalesError(ScaleTreeError):
    """Some declared scales cannot be reached from the root."""

    def __init__(self, root: str, names: Iterable[str]):
        self.root = root
        self.names = sorted(names)
        super().__init__(
            f"scales not reachable from root scale {root}: {' '.join(self.names)}"
        )


class UnknownRootError(ScaleTreeError):
    def __init__(self, root: str):
        self.root = root
        super().__init__(f"root scale {root} is not declared")
