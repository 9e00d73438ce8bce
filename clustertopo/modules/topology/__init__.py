"""
Cluster topology resolution.

Derives, for every cluster of a multi-cluster environment, the cluster hosting
its control plane, the network it belongs to and the cluster hosting its config.
Settings built from raw flags live in :mod:`clustertopo.modules.topology.settings`.
"""
from .errors import (
    ConfigurationError,
    ParseError,
    PreconditionError,
    RangeError,
    TopologyError,
)
from .models import ClusterIndex, ClusterTopology, NetworkTopology
from .resolver import (
    missing_clusters,
    resolve_config_topology,
    resolve_control_plane_topology,
    resolve_network_topology,
)

__all__ = [
    'ClusterIndex',
    'ClusterTopology',
    'NetworkTopology',
    'TopologyError',
    'ParseError',
    'RangeError',
    'PreconditionError',
    'ConfigurationError',
    'resolve_control_plane_topology',
    'resolve_network_topology',
    'resolve_config_topology',
    'missing_clusters',
]
