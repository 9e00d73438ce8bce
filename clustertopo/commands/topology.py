import json
import logging
from enum import Enum
from typing import Optional

import typer
import yaml

from clustertopo.modules.topology import TopologyError, missing_clusters
from clustertopo.modules.topology.settings import KubeFlags, Settings, new_settings_from_flags

app = typer.Typer(help="Resolve control plane, network and config topologies.")
logger = logging.getLogger("clustertopo.commands.topology")


class OutputFormat(str, Enum):
    YAML = 'yaml'
    JSON = 'json'


CONFIG_OPTION = typer.Option(None, "--config", "-c", help="YAML file holding topology flags")
KUBECONFIG_OPTION = typer.Option(
    None, "--kubeconfig", envvar="CLUSTERTOPO_KUBECONFIG",
    help="A comma-separated list of paths to kube config files for cluster environments."
)
CONTROL_PLANE_OPTION = typer.Option(
    None, "--control-plane-topology", envvar="CLUSTERTOPO_CONTROL_PLANE_TOPOLOGY",
    help="Mapping of each cluster to the cluster hosting its control plane, as "
         "<clusterIndex>:<controlPlaneClusterIndex>,... Defaults to a control plane per cluster."
)
NETWORK_OPTION = typer.Option(
    None, "--network-topology", envvar="CLUSTERTOPO_NETWORK_TOPOLOGY",
    help="Mapping of each cluster to its network name, as <clusterIndex>:<networkName>,... "
         "Ignored unless a control plane topology is given."
)
CONFIG_TOPOLOGY_OPTION = typer.Option(
    None, "--config-topology", envvar="CLUSTERTOPO_CONFIG_TOPOLOGY",
    help="Mapping of each cluster to the cluster hosting its config, as "
         "<clusterIndex>:<configClusterIndex>,... Defaults to the control plane topology."
)
LOADBALANCER_OPTION = typer.Option(
    None, "--loadbalancer/--no-loadbalancer",
    help="Whether clusters support external IPs for LoadBalancer services."
)
MINIKUBE_OPTION = typer.Option(
    False, "--minikube", help="Deprecated. See --loadbalancer. Setting this flag fails."
)


def load_settings(
    config: Optional[str],
    kubeconfig: Optional[str],
    control_plane_topology: Optional[str],
    network_topology: Optional[str],
    config_topology: Optional[str],
    loadbalancer: Optional[bool],
    minikube: bool,
) -> Settings:
    """Merge the config file with the command line and resolve the settings."""
    flags = KubeFlags.load(config).parse(
        kubeconfig=kubeconfig,
        control_plane_topology=control_plane_topology,
        network_topology=network_topology,
        config_topology=config_topology,
        loadbalancer_supported=loadbalancer,
        minikube=minikube or None,
    )
    return new_settings_from_flags(flags)


@app.command("resolve")
def resolve_cmd(
    config: Optional[str] = CONFIG_OPTION,
    kubeconfig: Optional[str] = KUBECONFIG_OPTION,
    control_plane_topology: Optional[str] = CONTROL_PLANE_OPTION,
    network_topology: Optional[str] = NETWORK_OPTION,
    config_topology: Optional[str] = CONFIG_TOPOLOGY_OPTION,
    loadbalancer: Optional[bool] = LOADBALANCER_OPTION,
    minikube: bool = MINIKUBE_OPTION,
    output: OutputFormat = typer.Option(OutputFormat.YAML, "--output", "-o", help="Output format"),
):
    """Resolve the topologies and print them."""
    try:
        settings = load_settings(
            config, kubeconfig, control_plane_topology, network_topology,
            config_topology, loadbalancer, minikube,
        )
    except TopologyError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    data = settings.to_dict()
    if output == OutputFormat.JSON:
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), nl=False)


@app.command("validate")
def validate_cmd(
    config: Optional[str] = CONFIG_OPTION,
    kubeconfig: Optional[str] = KUBECONFIG_OPTION,
    control_plane_topology: Optional[str] = CONTROL_PLANE_OPTION,
    network_topology: Optional[str] = NETWORK_OPTION,
    config_topology: Optional[str] = CONFIG_TOPOLOGY_OPTION,
    loadbalancer: Optional[bool] = LOADBALANCER_OPTION,
    minikube: bool = MINIKUBE_OPTION,
    strict: bool = typer.Option(False, "--strict", help="Fail if a topology leaves clusters uncovered"),
):
    """Validate the topologies, optionally requiring every cluster to be covered."""
    try:
        settings = load_settings(
            config, kubeconfig, control_plane_topology, network_topology,
            config_topology, loadbalancer, minikube,
        )
    except TopologyError as e:
        typer.echo(f"❌ Topology is invalid: {e}", err=True)
        raise typer.Exit(code=1)

    gaps = {
        "control plane": missing_clusters(settings.control_plane_topology, settings.num_clusters),
        "network": missing_clusters(settings.network_topology, settings.num_clusters),
        "config": missing_clusters(settings.config_topology, settings.num_clusters),
    }
    uncovered = {name: indexes for name, indexes in gaps.items() if indexes}
    for name, indexes in uncovered.items():
        logger.debug(f"{name} topology does not cover clusters {indexes}")

    if uncovered and strict:
        for name, indexes in uncovered.items():
            typer.echo(f"❌ {name} topology does not cover clusters: {indexes}", err=True)
        raise typer.Exit(code=1)

    for name, indexes in uncovered.items():
        typer.echo(f"⚠️  {name} topology does not cover clusters: {indexes}")
    typer.echo(
        f"✅ Topology is valid: {settings.num_clusters} clusters, "
        f"control planes in {settings.control_plane_clusters()}, "
        f"networks {settings.network_names()}"
    )
