"""Errors raised while resolving cluster topologies."""
from typing import Optional


class TopologyError(ValueError):
    """Base class for all topology resolution errors."""

    def __init__(self, message: str, topology: Optional[str] = None):
        super().__init__(message)
        self.topology = topology


class ParseError(TopologyError):
    """An entry of an encoded mapping is malformed.

    ``side`` names the part of the entry that failed to parse
    (e.g. ``"cluster index"``). It is ``None`` when the entry does not
    split into exactly two parts.
    """

    def __init__(self, topology: str, entry: str, side: Optional[str] = None):
        message = f"failed parsing {topology} mapping entry {entry}"
        if side:
            message += f": failed parsing {side}"
        super().__init__(message, topology)
        self.entry = entry
        self.side = side


class RangeError(TopologyError):
    """A parsed cluster index does not refer to an available cluster."""

    def __init__(self, topology: str, index: int, limit: int, role: str = "cluster index"):
        super().__init__(
            f"failed parsing {topology} topology: {role} {index} "
            f"exceeds number of available clusters {limit}",
            topology,
        )
        self.index = index
        self.limit = limit
        self.role = role


class PreconditionError(TopologyError):
    """Settings were requested before the command-line flags were parsed."""


class ConfigurationError(TopologyError):
    """Invalid or deprecated settings input."""
