import json

import pytest
import yaml
from jsonschema import validate
from typer.testing import CliRunner

from clustertopo.cli import app

runner = CliRunner()

SETTINGS_SCHEMA = {
    "type": "object",
    "properties": {
        "kube_config": {"type": "array", "items": {"type": "string"}},
        "loadbalancer_supported": {"type": "boolean"},
        "control_plane_topology": {"type": "object", "additionalProperties": {"type": "integer"}},
        "network_topology": {"type": "object", "additionalProperties": {"type": "string", "minLength": 1}},
        "config_topology": {"type": "object", "additionalProperties": {"type": "integer"}},
    },
    "required": [
        "kube_config", "loadbalancer_supported",
        "control_plane_topology", "network_topology", "config_topology",
    ]
}

def run_cli_command(cmd):
    return runner.invoke(app, cmd.split())

def test_help():
    result = run_cli_command("--help")
    assert result.exit_code == 0
    assert "Usage" in result.output
    assert "topology" in result.output

def test_topology_commands_exist():
    result = run_cli_command("topology --help")
    assert "resolve" in result.output
    assert "validate" in result.output

def test_resolve_yaml():
    result = run_cli_command("topology resolve --kubeconfig /a,/b,/c --control-plane-topology 0:0,1:0,2:2")
    assert result.exit_code == 0, result.output
    data = yaml.safe_load(result.stdout)
    assert data["control_plane_topology"] == {0: 0, 1: 0, 2: 2}
    assert data["config_topology"] == {0: 0, 1: 0, 2: 2}
    assert data["network_topology"] == {}

def test_resolve_json_matches_schema():
    result = run_cli_command(
        "topology resolve --kubeconfig /a,/b --control-plane-topology 0:0,1:1 "
        "--network-topology 0:network-a,1:network-b --no-loadbalancer -o json"
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    validate(instance=data, schema=SETTINGS_SCHEMA)
    assert data["network_topology"] == {"0": "network-a", "1": "network-b"}
    assert data["loadbalancer_supported"] is False

def test_resolve_reads_environment(monkeypatch):
    monkeypatch.setenv("CLUSTERTOPO_CONFIG_TOPOLOGY", "0:1,1:1")
    result = run_cli_command("topology resolve --kubeconfig /a,/b -o json")
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["config_topology"] == {"0": 1, "1": 1}

def test_resolve_config_file(tmp_path):
    config = tmp_path / "topology.yaml"
    config.write_text('kubeconfig: [/a, /b]\ncontrol_plane_topology: "0:0,1:0"\n')
    result = run_cli_command(f"topology resolve --config {config} --control-plane-topology 0:1,1:1 -o json")
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["control_plane_topology"] == {"0": 1, "1": 1}

@pytest.mark.parametrize("args, message", [
    ("--kubeconfig /a,/b --config-topology 5:0", "cluster index 5 exceeds number of available clusters 2"),
    ("--kubeconfig /a --control-plane-topology 1:2:3", "failed parsing control plane mapping entry 1:2:3"),
    ("--kubeconfig /a --minikube", "deprecated"),
])
def test_resolve_errors(args, message):
    result = run_cli_command(f"topology resolve {args}")
    assert result.exit_code == 1
    assert message in result.output

def test_validate_ok():
    result = run_cli_command("topology validate --kubeconfig /a,/b")
    assert result.exit_code == 0, result.output
    assert "✅ Topology is valid: 2 clusters" in result.output

def test_validate_strict_requires_coverage():
    args = "topology validate --kubeconfig /a,/b,/c --control-plane-topology 0:0,1:0 --network-topology 0:net"
    result = run_cli_command(args)
    assert result.exit_code == 0, result.output
    assert "⚠️" in result.output

    result = run_cli_command(args + " --strict")
    assert result.exit_code == 1
    assert "control plane topology does not cover clusters: [2]" in result.output
    assert "network topology does not cover clusters: [1, 2]" in result.output

def test_validate_reports_invalid_topology():
    result = run_cli_command("topology validate --kubeconfig /a --network-topology 0: --control-plane-topology 0:0")
    assert result.exit_code == 1
    assert "❌ Topology is invalid" in result.output

def test_missing_config_file_reported_once(tmp_path):
    result = run_cli_command(f"topology resolve --config {tmp_path / 'missing.yaml'}")
    assert result.exit_code == 1
    assert "❌ Config file not found" in result.output
    assert "❌ ❌" not in result.output
