"""Data types shared by the topology parser, resolver and settings."""
from typing import Dict

# Position of a cluster in the ordered list of kubeconfigs.
ClusterIndex = int

# Maps a cluster to the cluster hosting its control plane (or its config).
ClusterTopology = Dict[ClusterIndex, ClusterIndex]

# Maps a cluster to the name of the network it belongs to.
NetworkTopology = Dict[ClusterIndex, str]

CONTROL_PLANE = "control plane"
NETWORK = "network"
CONFIG = "config"
