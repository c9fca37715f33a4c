"""
Tests for the command line entrypoint.
"""

import json

import pytest
import yaml

from hwscan import __version__
from hwscan.core.configuration.app_config import ENV_CONFIG
from hwscan.main import build_parser, main


@pytest.fixture
def config_file(populated_system, tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_CONFIG, raising=False)
    data = {
        "sources": {"proc_root": str(populated_system.proc), "sys_root": str(populated_system.sys)},
        "commands": {
            "dmidecode": "hwscan-test-missing-dmidecode",
            "lspci": "hwscan-test-missing-lspci",
            "nvidia_smi": "hwscan-test-missing-nvidia-smi",
        },
        "export": {"mount_roots": [str(tmp_path / "media")]},
        "logging": {"log_dir": str(tmp_path / "logs")},
    }
    path = tmp_path / "hwscan.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.port is None
    assert not args.no_server
    assert not args.no_export
    assert args.output is None


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert f"HWSCAN v{__version__}" in capsys.readouterr().out


def test_scan_without_server_or_export(config_file, capsys):
    assert main(["--config", str(config_file), "--no-server", "--no-export"]) == 0

    out = capsys.readouterr().out
    assert "Machine ID: HWSCAN-4C4C4544003237108037B7C04F343132" in out
    assert "Web interface" not in out
    assert "exported" not in out


def test_scan_with_explicit_output(config_file, tmp_path, capsys):
    output = tmp_path / "snapshot.json"
    assert main(["--config", str(config_file), "--no-server", "--output", str(output)]) == 0

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["cpu"]["threads"] == 4
    assert data["disks"][0]["name"] == "nvme0n1"
    assert f"Path: {output}" in capsys.readouterr().out


def test_scan_failure(config_file, populated_system):
    (populated_system.proc / "meminfo").unlink()
    assert main(["--config", str(config_file), "--no-server", "--no-export"]) == 1


def test_invalid_config(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv(ENV_CONFIG, raising=False)
    assert main(["--config", str(tmp_path / "absent.yaml"), "--no-server"]) == 1
    assert "Error loading configuration" in capsys.readouterr().err
