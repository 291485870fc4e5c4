import pytest
import yaml

from ceres_bridge.config_loader import load_config
from ceres_bridge.main import build_parser, run


def test_sample_config_is_loadable(tmp_path, capsys):
    with pytest.raises(SystemExit) as exit_info:
        run(["--sample-config"])

    assert exit_info.value.code == 0
    path = tmp_path / "config.yaml"
    path.write_text(capsys.readouterr().out)
    config = load_config(str(path))
    assert config['known_devices'] == [{"name": "living-room-ac", "address": "10.0.0.5"}]
    assert config['discovery']['service_type'] == "_ceres-http._tcp.local."


def test_config_path_defaults_to_environment(monkeypatch):
    monkeypatch.setenv("CONFIG_FILE", "/etc/ceres/bridge.yaml")

    assert build_parser().parse_args([]).config == "/etc/ceres/bridge.yaml"
    assert build_parser().parse_args(["--config", "local.yaml"]).config == "local.yaml"


def test_missing_config_exits_with_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as exit_info:
        run(["--config", str(tmp_path / "missing.yaml")])

    assert exit_info.value.code == 1
    assert "Cannot load configuration" in capsys.readouterr().err


def test_invalid_config_exits_with_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"api": {"port": 70000}}))

    with pytest.raises(SystemExit) as exit_info:
        run(["--config", str(path)])

    assert exit_info.value.code == 1
