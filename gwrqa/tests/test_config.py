import json
from pathlib import Path

import pytest

from gwrqa.services.config import ConfigManager


@pytest.fixture
def configs_path(tmp_path: Path) -> Path:
    return tmp_path / "configs.json"


def test_generate(tmp_path: Path, configs_path: Path):
    config_manager = ConfigManager(configs_path)
    assert not config_manager.exists
    config_manager.generate(tmp_path)
    assert config_manager.exists
    with open(configs_path, encoding="utf-8") as f:
        saved = json.load(f)
    assert saved["data_root"] == str(tmp_path.absolute())
    assert saved["output_root"] == str((tmp_path / "output").absolute())
    assert saved["official_valid_limit"] == 0.8
    assert saved["workers"] == 1


def test_round_trip(tmp_path: Path, configs_path: Path):
    ConfigManager(configs_path).generate(tmp_path)
    config_manager = ConfigManager(configs_path)
    config_manager.set("official_valid_limit", "0.5")
    assert ConfigManager(configs_path).get("official_valid_limit") == 0.5


@pytest.mark.parametrize("key, value", [("official_valid_limit", 1.5), ("workers", 0)])
def test_set_invalid(tmp_path: Path, configs_path: Path, key, value):
    config_manager = ConfigManager(configs_path)
    config_manager.generate(tmp_path)
    with pytest.raises(ValueError):
        config_manager.set(key, value)


def test_workflow_configs_overrides(tmp_path: Path, configs_path: Path):
    config_manager = ConfigManager(configs_path)
    config_manager.generate(tmp_path)
    configs = config_manager.workflow_configs(municipality="Zürich", workers=None, official_valid_limit=0.6)
    assert configs["data_root"] == tmp_path.absolute()
    assert configs["municipality"] == "Zürich"
    assert configs["workers"] == 1
    assert configs["official_valid_limit"] == 0.6
    # overrides are not persisted
    assert ConfigManager(configs_path).get("municipality") is None


def test_workflow_configs_without_data_root(configs_path: Path):
    with pytest.raises(ValueError):
        ConfigManager(configs_path).workflow_configs()
