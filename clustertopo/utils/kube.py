import logging
import os
from typing import List, MutableMapping, Optional

from clustertopo.config import Config
from clustertopo.modules.topology.errors import ConfigurationError

logger = logging.getLogger("clustertopo.kube")


def normalize_file(path: str) -> str:
    """Trim surrounding spaces from a kubeconfig path and expand a leading ``~``."""
    path = path.strip()
    expanded = os.path.expanduser(path)
    if path.startswith("~") and expanded.startswith("~"):
        raise ConfigurationError(f"Cannot expand home directory in kubeconfig path: {path}")
    return expanded


def parse_kube_configs(value: Optional[str], separator: str) -> List[str]:
    """
    Split a list of kubeconfig paths on ``separator``.
    Empty parts are dropped, the rest are normalized with normalize_file.
    """
    if not value:
        return []

    out = []
    for part in value.split(separator):
        if part:
            out.append(normalize_file(part))
    return out


def kube_configs_from_environment(environ: Optional[MutableMapping[str, str]] = None) -> List[str]:
    """
    Read the kubeconfig list from the KUBECONFIG environment variable.
    Falls back to the default kubeconfig when the variable is unset or empty.
    """
    if environ is None:
        environ = os.environ

    # Normalize KUBECONFIG so that it is separated by the OS path list separator.
    value = environ.get(Config.KUBECONFIG_ENV, "")
    if "," in value:
        updated = value.replace(",", os.pathsep)
        environ[Config.KUBECONFIG_ENV] = updated
        logger.warning(f"KUBECONFIG contains commas: {value}. Replacing with {os.pathsep}: {updated}")
        value = updated
    logger.info(f"KUBECONFIG: {value}")

    out = parse_kube_configs(value, os.pathsep)
    if not out:
        out = [normalize_file(Config.DEFAULT_KUBECONFIG)]
    logger.info(f"Using KUBECONFIG array: {out}")
    return out
