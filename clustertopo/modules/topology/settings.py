"""Multi-cluster environment settings.

Settings are built once from :class:`KubeFlags`, the raw values collected from
the command line, the environment and an optional YAML file, with the following
precedence:
1. Command-line options
2. Environment variables
3. Configuration file
4. Default values
"""
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from clustertopo.config import Config
from clustertopo.utils import kube
from .errors import ConfigurationError, PreconditionError
from .models import ClusterIndex
from .resolver import (
    resolve_config_topology,
    resolve_control_plane_topology,
    resolve_network_topology,
)

logger = logging.getLogger("clustertopo.topology.settings")


class KubeFlags(BaseModel):
    """Raw, unresolved multi-cluster flags."""
    model_config = ConfigDict(extra="ignore")

    kubeconfig: str = Field(
        default="",
        description="A comma-separated list of paths to kube config files for cluster environments."
    )
    control_plane_topology: str = Field(
        default="",
        description="Comma-separated <clusterIndex>:<controlPlaneClusterIndex> pairs. "
                    "If not specified, a control plane is deployed per cluster (e.g. 0:0,1:1,...)."
    )
    network_topology: str = Field(
        default="",
        description="Comma-separated <clusterIndex>:<networkName> pairs, for multi-network scenarios."
    )
    config_topology: str = Field(
        default="",
        description="Comma-separated <clusterIndex>:<configClusterIndex> pairs. "
                    "If not specified, every cluster uses the config of its control plane cluster."
    )
    minikube: bool = Field(
        default=False,
        description="Deprecated. See loadbalancer_supported. Setting this flag fails."
    )
    loadbalancer_supported: bool = Field(
        default=True,
        description="Whether clusters support external IPs for LoadBalancer services."
    )
    parsed: bool = Field(default=False, exclude=True)

    @field_validator('kubeconfig', mode='before')
    @classmethod
    def join_kubeconfig_list(cls, v: Any) -> Any:
        """Accept a YAML list of kubeconfig paths as well as a comma-separated string."""
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return ",".join(str(p) for p in v)
        return v

    @field_validator('control_plane_topology', 'network_topology', 'config_topology', mode='before')
    @classmethod
    def require_string(cls, v: Any) -> Any:
        # YAML reads an unquoted 1:0 as a base 60 integer.
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError(f"topology must be a quoted string, got {v!r}")
        return v

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> 'KubeFlags':
        """Load flags from a YAML file.

        An explicit path must exist. Without one, the default file is used
        when present and defaults otherwise.
        """
        if config_path:
            path = Path(config_path).expanduser().absolute()
            if not path.exists():
                raise ConfigurationError(f"Config file not found: {path}")
        else:
            path = Path(Config.CONFIG_FILE).expanduser().absolute()
            if not path.exists():
                return cls()

        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping in {path}, got {type(data).__name__}")

        try:
            flags = cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings in {path}: {e}") from e
        logger.debug(f"Loaded flags from {path}")
        return flags

    def parse(self, **overrides: Any) -> 'KubeFlags':
        """Return a copy with the non-None overrides applied, marked as parsed."""
        update = {k: v for k, v in overrides.items() if v is not None}
        update['parsed'] = True
        return self.model_copy(update=update)


@dataclass(frozen=True)
class Settings:
    """Resolved, read-only multi-cluster settings."""
    kube_config: Tuple[str, ...]
    control_plane_topology: Mapping[ClusterIndex, ClusterIndex]
    network_topology: Mapping[ClusterIndex, str]
    config_topology: Mapping[ClusterIndex, ClusterIndex]
    loadbalancer_supported: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'kube_config', tuple(self.kube_config))
        for name in ('control_plane_topology', 'network_topology', 'config_topology'):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @property
    def num_clusters(self) -> int:
        return len(self.kube_config)

    def is_primary(self, index: ClusterIndex) -> bool:
        """True if the cluster hosts its own control plane."""
        return self.control_plane_topology.get(index) == index

    def control_plane_clusters(self) -> List[ClusterIndex]:
        return sorted(set(self.control_plane_topology.values()))

    def config_clusters(self) -> List[ClusterIndex]:
        return sorted(set(self.config_topology.values()))

    def network_names(self) -> List[str]:
        return sorted(set(self.network_topology.values()))

    def clone(self) -> 'Settings':
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kube_config': list(self.kube_config),
            'loadbalancer_supported': self.loadbalancer_supported,
            'control_plane_topology': dict(sorted(self.control_plane_topology.items())),
            'network_topology': dict(sorted(self.network_topology.items())),
            'config_topology': dict(sorted(self.config_topology.items())),
        }

    def __str__(self) -> str:
        lines = ["Settings:"]
        for key, value in self.to_dict().items():
            lines.append(f"  {key + ':':<26}{value}")
        return "\n".join(lines)


def new_settings_from_flags(
    flags: Optional[KubeFlags],
    environ: Optional[MutableMapping[str, str]] = None,
) -> Settings:
    """Resolve settings from parsed flags.

    Args:
        flags: Flags returned by :meth:`KubeFlags.parse`.
        environ: Environment used for the KUBECONFIG fallback (default: os.environ).

    Raises:
        PreconditionError: If the flags have not been parsed yet.
        ConfigurationError: If a deprecated flag is set or a kubeconfig path is invalid.
        ParseError, RangeError: If a topology is malformed or out of range.
    """
    if flags is None or not flags.parsed:
        raise PreconditionError("flags must be parsed before settings can be created")

    if flags.minikube:
        raise ConfigurationError(
            "the minikube flag is deprecated, set loadbalancer_supported=false instead"
        )

    try:
        kube_configs = kube.parse_kube_configs(flags.kubeconfig, ",")
    except ConfigurationError as e:
        raise ConfigurationError(f"kubeconfig: {e}") from e
    if not kube_configs:
        kube_configs = kube.kube_configs_from_environment(environ)

    control_plane = resolve_control_plane_topology(kube_configs, flags.control_plane_topology)
    network = resolve_network_topology(
        kube_configs, flags.control_plane_topology, flags.network_topology
    )
    config = resolve_config_topology(kube_configs, flags.config_topology, control_plane)

    settings = Settings(
        kube_config=tuple(kube_configs),
        control_plane_topology=control_plane,
        network_topology=network,
        config_topology=config,
        loadbalancer_supported=flags.loadbalancer_supported,
    )
    logger.debug(str(settings))
    return settings
