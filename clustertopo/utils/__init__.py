"""Helpers shared by the clustertopo commands."""
from .kube import kube_configs_from_environment, normalize_file, parse_kube_configs

__all__ = [
    'kube_configs_from_environment',
    'normalize_file',
    'parse_kube_configs',
]
