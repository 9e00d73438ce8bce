"""Parser for the compact ``<clusterIndex>:<value>[,...]`` topology encodings.

Grammar::

    mapping := entry (',' entry)*
    entry   := left ':' right

An empty (or unset) string is an empty mapping. Parsing is all-or-nothing:
the first malformed entry raises :class:`ParseError`.
"""
import logging
import re
from typing import Dict, Iterator, Optional, Tuple

from .errors import ParseError, RangeError
from .models import ClusterTopology, NetworkTopology, NETWORK

logger = logging.getLogger("clustertopo.topology.parser")

_INDEX_RE = re.compile(r"[0-9]+")


def iter_entries(encoded: Optional[str]) -> Iterator[str]:
    """Yield the raw comma-separated entries of an encoded mapping.

    Blank entries, such as the one left by a trailing comma, are skipped.
    """
    if not encoded:
        return
    for entry in encoded.split(","):
        if entry.strip():
            yield entry


def split_entry(topology: str, entry: str) -> Tuple[str, str]:
    parts = entry.split(":")
    if len(parts) != 2:
        raise ParseError(topology, entry)
    return parts[0].strip(), parts[1].strip()


def parse_index(topology: str, entry: str, value: str, side: str) -> int:
    """Parse one side of an entry as a non-negative cluster index."""
    if not _INDEX_RE.fullmatch(value):
        raise ParseError(topology, entry, side)
    return int(value)


def _store(topology: str, out: Dict, key: int, value, entry: str) -> None:
    if key in out and out[key] != value:
        logger.warning(
            f"Duplicate {topology} mapping for cluster {key}: "
            f"{out[key]!r} replaced by {value!r} (entry {entry})"
        )
    out[key] = value


def parse_cluster_mapping(
    topology: str,
    encoded: Optional[str],
    value_side: str,
) -> ClusterTopology:
    """Parse ``<clusterIndex>:<clusterIndex>`` pairs.

    Args:
        topology: Name of the topology being parsed, used in error messages.
        encoded: The raw encoded mapping.
        value_side: Name of the right-hand index, e.g. ``"control plane index"``.

    Returns:
        The parsed mapping. Ranges are not checked here.
    """
    out: ClusterTopology = {}
    for entry in iter_entries(encoded):
        left, right = split_entry(topology, entry)
        cluster_index = parse_index(topology, entry, left, "cluster index")
        target_index = parse_index(topology, entry, right, value_side)
        _store(topology, out, cluster_index, target_index, entry)
    return out


def parse_network_mapping(encoded: Optional[str], num_clusters: int) -> NetworkTopology:
    """Parse ``<clusterIndex>:<networkName>`` pairs.

    Each entry is checked in order: arity, index syntax, index range,
    then a non-empty network name.
    """
    out: NetworkTopology = {}
    for entry in iter_entries(encoded):
        left, name = split_entry(NETWORK, entry)
        cluster_index = parse_index(NETWORK, entry, left, "cluster index")
        if cluster_index >= num_clusters:
            raise RangeError(NETWORK, cluster_index, num_clusters)
        if not name:
            raise ParseError(NETWORK, entry, "network name")
        _store(NETWORK, out, cluster_index, name, entry)
    return out
