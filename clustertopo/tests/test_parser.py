import logging

import pytest

from clustertopo.modules.topology.errors import ParseError, RangeError
from clustertopo.modules.topology.parser import (
    iter_entries,
    parse_cluster_mapping,
    parse_network_mapping,
)

def test_empty_string_is_empty_mapping():
    assert parse_cluster_mapping("control plane", "", "control plane index") == {}
    assert parse_cluster_mapping("control plane", None, "control plane index") == {}
    assert parse_network_mapping("", 3) == {}

def test_blank_entries_are_skipped():
    assert list(iter_entries("0:0,,1:0,")) == ["0:0", "1:0"]

def test_parse_cluster_mapping():
    assert parse_cluster_mapping("config", "0:1, 1:1 ,2:0", "config cluster index") == {0: 1, 1: 1, 2: 0}

@pytest.mark.parametrize("entry", ["3", "1:2:3", "0:0:"])
def test_wrong_arity(entry):
    with pytest.raises(ParseError) as exc:
        parse_cluster_mapping("control plane", entry, "control plane index")
    assert exc.value.entry == entry
    assert exc.value.side is None
    assert entry in str(exc.value)

@pytest.mark.parametrize("entry, side", [
    ("x:0", "cluster index"),
    ("-1:0", "cluster index"),
    ("+1:0", "cluster index"),
    ("0:-1", "control plane index"),
    ("0:", "control plane index"),
    ("0:1.5", "control plane index"),
])
def test_bad_index(entry, side):
    with pytest.raises(ParseError) as exc:
        parse_cluster_mapping("control plane", entry, "control plane index")
    assert exc.value.side == side
    assert entry in str(exc.value)

def test_failure_is_atomic():
    with pytest.raises(ParseError) as exc:
        parse_cluster_mapping("config", "0:0,1:x,2:2", "config cluster index")
    assert exc.value.entry == "1:x"

def test_duplicate_key_last_wins(caplog):
    with caplog.at_level(logging.WARNING, logger="clustertopo.topology.parser"):
        result = parse_cluster_mapping("control plane", "0:0,0:1", "control plane index")
    assert result == {0: 1}
    assert "Duplicate control plane mapping for cluster 0" in caplog.text

def test_parse_network_mapping():
    assert parse_network_mapping("0:network-a,1:network-b", 2) == {0: "network-a", 1: "network-b"}

def test_network_empty_name():
    with pytest.raises(ParseError) as exc:
        parse_network_mapping("2:", 3)
    assert exc.value.side == "network name"
    assert "2:" in str(exc.value)

def test_network_range_checked_before_name():
    with pytest.raises(RangeError) as exc:
        parse_network_mapping("4:", 3)
    assert exc.value.index == 4
    assert exc.value.limit == 3
