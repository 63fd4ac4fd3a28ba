from __future__ import annotations

import json

import pytest

from netsweep import cli
from netsweep.models import HostResult


class FakeScanner:
    seen = []

    def __init__(self, config):
        config.validate()
        self.config = config
        self.elapsed_s = 0.01
        FakeScanner.seen.append(config)

    def run(self):
        return [HostResult("10.0.0.1", frozenset({22})), HostResult("10.0.0.2")]


@pytest.fixture
def fake_scanner(monkeypatch):
    FakeScanner.seen = []
    monkeypatch.setattr(cli, "NetworkScanner", FakeScanner)
    return FakeScanner


def test_defaults_build_config(fake_scanner, capsys) -> None:
    assert cli.main(["-n", "10.0.0.0/30"]) == 0
    config = fake_scanner.seen[0]
    assert config.ports == ""
    assert config.timeout_s == 0.5
    assert config.workers == 100
    assert config.verbose is False
    out = capsys.readouterr().out
    assert "[*] Scanning network 10.0.0.0/30 (common ports)..." in out
    assert "[+] Found open ports on 1 host(s):" in out
    assert "    10.0.0.1: [22]" in out


def test_flags_map_to_config(fake_scanner) -> None:
    argv = ["-n", "10.0.0.1", "-p", "80,443", "-t", "250", "-w", "8", "-m", "64", "--max-hosts", "16", "-v"]
    assert cli.main(argv) == 0
    config = fake_scanner.seen[0]
    assert (config.ports, config.timeout_s, config.workers) == ("80,443", 0.25, 8)
    assert (config.max_inflight, config.max_hosts, config.verbose) == (64, 16, True)


def test_env_defaults(monkeypatch, fake_scanner) -> None:
    monkeypatch.setenv("NETSWEEP_TIMEOUT_MS", "1500")
    monkeypatch.setenv("NETSWEEP_WORKERS", "12")
    assert cli.main(["-n", "10.0.0.1"]) == 0
    config = fake_scanner.seen[0]
    assert config.timeout_s == 1.5
    assert config.workers == 12


def test_bad_env_value_falls_back(monkeypatch, fake_scanner) -> None:
    monkeypatch.setenv("NETSWEEP_WORKERS", "lots")
    assert cli.main(["-n", "10.0.0.1"]) == 0
    assert fake_scanner.seen[0].workers == 100


def test_json_output_is_parseable(fake_scanner, capsys) -> None:
    assert cli.main(["-n", "10.0.0.0/31", "--format", "json", "--all"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [r["host"] for r in payload["results"]] == ["10.0.0.1", "10.0.0.2"]


def test_invalid_network_exit_code(capsys) -> None:
    assert cli.main(["-n", "not-an-ip", "-p", "80"]) == 2
    assert "Found open ports" not in capsys.readouterr().out


def test_invalid_ports_exit_code() -> None:
    assert cli.main(["-n", "10.0.0.1", "-p", "80-x"]) == 2


def test_invalid_workers_exit_code(fake_scanner) -> None:
    assert cli.main(["-n", "10.0.0.1", "-w", "0"]) == 2


def test_max_hosts_default_is_capped(fake_scanner) -> None:
    assert cli.main(["-n", "10.0.0.1"]) == 0
    assert fake_scanner.seen[0].max_hosts == 65536


def test_huge_ipv6_block_refused_by_default(capsys) -> None:
    assert cli.main(["-n", "2001:db8::/64", "-p", "80"]) == 2
    assert "Found open ports" not in capsys.readouterr().out
