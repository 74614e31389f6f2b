from datetime import datetime
from pathlib import Path

from rich.console import Console

from gwrqa.constants.files import Dirs, Raw
from gwrqa.types.base import FileExt, WorkflowConfigs

console = Console()


class UtilsBase(object):

    @staticmethod
    def generate_filename(filename: str, ext: str = "csv") -> str:
        return f"{filename}.{ext}"

    @staticmethod
    def get_timestamp():
        return datetime.now().strftime("%Y_%m_%d_%H_%M_%S")

    @classmethod
    def generate_path(cls, data_root: str | Path, subdir: str, filename: str, ext: FileExt = "csv") -> Path:
        """Returns file path for specified file name and subdirectory."""
        filename: str = cls.generate_filename(filename, ext)
        return Path(data_root) / subdir / filename

    @classmethod
    def output_root(cls, configs: WorkflowConfigs) -> Path:
        """Output files go to 'output_root' if set, 'ROOT/output' otherwise."""
        output_root = configs.get("output_root")
        if output_root:
            return Path(output_root)
        return Path(configs["data_root"]) / Dirs.OUTPUT

    @classmethod
    def generate_data_dirs(cls, root: Path):
        """
        Check if required directories exist and create them if they don't.
        Args:
            root (Path): Root directory path where all subdirectories should be created
        Raises:
            ValueError: If root path is not provided or is invalid
        """
        if not root:
            raise ValueError("Root directory path must be provided")
        directories = [
            Dirs.RAW,
            Dirs.OUTPUT,
            Path(Dirs.OUTPUT) / Dirs.MISSING,
            Path(Dirs.OUTPUT) / Dirs.WARNINGS,
            Path(Dirs.OUTPUT) / Dirs.MATCHED,
            Dirs.SUMMARY_STATS,
            Dirs.VALIDATION_ERRORS,
        ]
        for dir_name in directories:
            dir_path: Path = root / dir_name
            if not dir_path.exists():
                try:
                    dir_path.mkdir(parents=True, exist_ok=True)
                except Exception as e:
                    raise RuntimeError(f"Failed to create directory {dir_path}: {str(e)}")


class PathGenerators(UtilsBase):
    """
    Helper functions to return the file path for each individual dataset. Methods are named by
    '{dir_name}_{dataset_name}()'
    """
    # -----------
    # ----RAW----
    # -----------
    @classmethod
    def raw_gwr_addresses(cls, configs: WorkflowConfigs) -> Path:
        """:returns: ROOT/raw/gwr_addresses[ext]"""
        return cls.generate_path(
            configs["data_root"],
            Dirs.RAW,
            Raw.GWR_ADDRESSES,
            configs.get("load_ext", "csv")
        )

    @classmethod
    def raw_osm_polygons(cls, configs: WorkflowConfigs) -> Path:
        """:returns: ROOT/raw/osm_polygons[ext]"""
        return cls.generate_path(
            configs["data_root"],
            Dirs.RAW,
            Raw.OSM_POLYGONS,
            configs.get("load_ext", "csv")
        )

    @classmethod
    def raw_osm_points(cls, configs: WorkflowConfigs) -> Path:
        """:returns: ROOT/raw/osm_points[ext]"""
        return cls.generate_path(
            configs["data_root"],
            Dirs.RAW,
            Raw.OSM_POINTS,
            configs.get("load_ext", "csv")
        )

    # --------------
    # ----OUTPUT----
    # --------------
    @classmethod
    def missing(cls, configs: WorkflowConfigs, id: str) -> Path:
        """:returns: OUTPUT/missing/{id}.geojson, id is a municipality number or a canton code"""
        return cls.generate_path(cls.output_root(configs), Dirs.MISSING, id, "geojson")

    @classmethod
    def warnings(cls, configs: WorkflowConfigs, id: str) -> Path:
        """:returns: OUTPUT/warnings/{id}.geojson"""
        return cls.generate_path(cls.output_root(configs), Dirs.WARNINGS, id, "geojson")

    @classmethod
    def matched(cls, configs: WorkflowConfigs, id: str) -> Path:
        """:returns: OUTPUT/matched/{id}.geojson"""
        return cls.generate_path(cls.output_root(configs), Dirs.MATCHED, id, "geojson")

    # ---------------------
    # ----SUMMARY STATS----
    # ---------------------
    @classmethod
    def summary_stats(cls, configs: WorkflowConfigs, id: str) -> Path:
        """:returns: ROOT/summary_stats/{id}.csv"""
        return cls.generate_path(configs["data_root"], Dirs.SUMMARY_STATS, id)

    # -------------------------
    # ----VALIDATION ERRORS----
    # -------------------------
    @classmethod
    def validation_errors(cls, configs: WorkflowConfigs, wkfl_name: str, id: str) -> Path:
        """:returns: ROOT/validation_errors/{wkfl_name}_{id}_{timestamp}.csv"""
        name = wkfl_name.lower().replace(" ", "_")
        return cls.generate_path(
            configs["data_root"],
            Dirs.VALIDATION_ERRORS,
            f"{name}_{id}_{cls.get_timestamp()}"
        )
