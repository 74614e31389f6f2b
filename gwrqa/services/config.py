import json
from pathlib import Path
from typing import Any

from gwrqa.constants.base import CONFIGS_FILENAME, DEFAULT_OFFICIAL_VALID_LIMIT, DEFAULT_WORKERS
from gwrqa.constants.files import Dirs
from gwrqa.types.base import WorkflowConfigs
from gwrqa.utils import console


class ConfigManager:

    DEFAULTS: dict[str, Any] = {
        "load_ext": "csv",
        "official_valid_limit": DEFAULT_OFFICIAL_VALID_LIMIT,
        "municipality": None,
        "workers": DEFAULT_WORKERS,
    }

    def __init__(self, configs_path: Path | None = None):
        self._configs_path = configs_path or Path(__file__).parent.parent / CONFIGS_FILENAME
        self._configs: dict[str, Any] = {}
        self.load()

    @classmethod
    def validate(cls, key: str, value: Any) -> Any:
        """Checks a single configuration value, returns it converted to its expected type."""
        if key == "official_valid_limit":
            limit = float(value)
            if not 0 <= limit <= 1:
                raise ValueError(f"official_valid_limit must be between 0 and 1, got {value}")
            return limit
        if key == "workers":
            workers = int(value)
            if workers < 1:
                raise ValueError(f"workers must be at least 1, got {value}")
            return workers
        return value

    def generate(self, data_root: Path, output_root: Path | None = None) -> None:
        """
        Generates new configs.json file.

        Args:
            data_root: Root directory containing the raw extracts
            output_root: Directory for GeoJSON output, 'data_root/output' if not given
        Raises:
            OSError: If there are permission issues or path creation fails
        """
        output_root = output_root or data_root / Dirs.OUTPUT
        json_configs: dict[str, Any] = {
            "data_root": str(data_root.absolute()),
            "output_root": str(output_root.absolute()),
            **self.DEFAULTS,
        }
        try:
            with open(self._configs_path, "w", encoding="utf-8") as f:
                json.dump(json_configs, f, indent=2)
        except OSError as e:
            raise OSError(f"Failed to create config file: {e}")
        self._configs = json_configs

    def load(self) -> None:
        """Load configuration from file"""
        if self._configs_path.exists():
            with open(self._configs_path, encoding="utf-8") as f:
                self._configs = json.load(f)

    def save(self) -> None:
        """Save current configuration to file"""
        with open(str(self._configs_path), "w", encoding="utf-8") as f:
            json.dump(self._configs, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value"""
        return self._configs.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value"""
        self._configs[key] = self.validate(key, value)
        self.save()

    def workflow_configs(self, **overrides: Any) -> WorkflowConfigs:
        """
        Returns the configs used by a single run: file values on top of the defaults, then every override that is not
        None. Overrides are not written back to the file.
        """
        merged: dict[str, Any] = {**self.DEFAULTS, **self._configs}
        for key, value in overrides.items():
            if value is not None:
                merged[key] = value
        for key in ("official_valid_limit", "workers"):
            merged[key] = self.validate(key, merged[key])
        if "data_root" not in merged:
            raise ValueError("No data_root configured. Run `gwrqa init /path/to/data/root` first.")
        configs: WorkflowConfigs = {
            "data_root": Path(merged["data_root"]),
            "load_ext": merged["load_ext"],
            "official_valid_limit": merged["official_valid_limit"],
            "municipality": merged["municipality"],
            "workers": merged["workers"],
        }
        if merged.get("output_root"):
            configs["output_root"] = Path(merged["output_root"])
        return configs

    @property
    def path(self) -> str:
        return str(self._configs_path)

    @property
    def exists(self) -> bool:
        found = self._configs_path.exists()
        if not found:
            console.print("configs file not found")
        return found

    @property
    def configs(self) -> dict[str, Any]:
        """Public read-only access to configuration"""
        return self._configs.copy()
