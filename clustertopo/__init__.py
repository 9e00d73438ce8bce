"""clustertopo - resolve control plane, network and config topologies of multi-cluster environments."""

__version__ = "0.1.0"
