"""Resolution of the control plane, network and config topologies.

All functions are pure: they take the ordered cluster identifiers and the raw
encoded mappings and return new dictionaries. Nothing is cached between calls.
"""
import logging
from typing import List, Mapping, Optional, Sequence

from clustertopo.config import Config
from .errors import RangeError
from .models import (
    CONFIG,
    CONTROL_PLANE,
    ClusterTopology,
    NetworkTopology,
)
from .parser import iter_entries, parse_cluster_mapping, parse_network_mapping

logger = logging.getLogger("clustertopo.topology.resolver")


def _check_ranges(topology: str, mapping: ClusterTopology, num_clusters: int, value_role: str) -> None:
    for cluster_index, target_index in sorted(mapping.items()):
        if cluster_index >= num_clusters:
            raise RangeError(topology, cluster_index, num_clusters)
        if target_index >= num_clusters:
            raise RangeError(topology, target_index, num_clusters, value_role)


def resolve_control_plane_topology(
    cluster_ids: Sequence[str],
    encoded: Optional[str],
) -> ClusterTopology:
    """Resolve which cluster hosts the control plane of every cluster.

    Args:
        cluster_ids: Ordered cluster identifiers (kubeconfig paths).
        encoded: ``<clusterIndex>:<controlPlaneClusterIndex>`` pairs.

    Returns:
        The identity topology when ``encoded`` is empty, otherwise the
        explicit mapping, which is not completed for missing clusters.

    Raises:
        ParseError: If an entry is malformed.
        RangeError: If an index exceeds the number of clusters.
    """
    num_clusters = len(cluster_ids)
    topology = parse_cluster_mapping(CONTROL_PLANE, encoded, "control plane index")

    if not topology:
        # Default to deploying a control plane per cluster.
        logger.debug(f"No control plane topology given, replicating across {num_clusters} clusters")
        return {index: index for index in range(num_clusters)}

    _check_ranges(CONTROL_PLANE, topology, num_clusters, "control plane cluster index")
    return topology


def resolve_network_topology(
    cluster_ids: Sequence[str],
    control_plane_encoded: Optional[str],
    network_encoded: Optional[str],
) -> NetworkTopology:
    """Resolve the network name of every cluster.

    The flat single-network default applies when no control plane topology
    was given, whatever ``network_encoded`` holds. With a control plane
    topology, only the clusters named in ``network_encoded`` get an entry.
    """
    num_clusters = len(cluster_ids)
    if not any(iter_entries(control_plane_encoded)):
        if network_encoded:
            logger.info("Ignoring network topology since no control plane topology was given")
        return {index: Config.DEFAULT_NETWORK for index in range(num_clusters)}

    return parse_network_mapping(network_encoded, num_clusters)


def resolve_config_topology(
    cluster_ids: Sequence[str],
    encoded: Optional[str],
    fallback: Mapping[int, int],
) -> ClusterTopology:
    """Resolve which cluster hosts the configuration of every cluster.

    When ``encoded`` is empty every cluster uses the config of its entry in
    ``fallback``, usually the resolved control plane topology. The result is
    always a new dictionary.
    """
    num_clusters = len(cluster_ids)
    topology = parse_cluster_mapping(CONFIG, encoded, "config cluster index")

    if not topology:
        # Default to every cluster using config from its control plane cluster.
        return dict(fallback)

    _check_ranges(CONFIG, topology, num_clusters, "config cluster index")
    return topology


def missing_clusters(topology: Mapping[int, object], num_clusters: int) -> List[int]:
    """Return the sorted cluster indices that have no entry in ``topology``."""
    return [index for index in range(num_clusters) if index not in topology]
