from abc import ABC, abstractmethod
from concurrent.futures import as_completed
from concurrent.futures.thread import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable, Mapping, Type

import numpy as np
import pandas as pd
import pandera as pa
from rich.console import Console
from rich.progress import Progress, TextColumn, BarColumn, TimeElapsedColumn, SpinnerColumn

from gwrqa.constants.base import DEFAULT_OFFICIAL_VALID_LIMIT, OSM_GEOM_POINT, OSM_GEOM_POLYGON, UNKNOWN_CANTON
from gwrqa.constants.columns import GWRAddresses as g, OSMAddresses as o
from gwrqa.constants.files import Raw as r
from gwrqa.schema.raw import GWRAddresses, OSMAddresses
from gwrqa.services.dataframe.base import DataFrameOpsBase as ops_df
from gwrqa.services.export import GeoJsonExporter as geojson
from gwrqa.services.match import Matcher
from gwrqa.services.osm import OSMIndexBuilder
from gwrqa.services.registry import RegistryLoader
from gwrqa.services.summary_stats import SSCompare, Stats, StatsAggregator, UnitResult
from gwrqa.services.terminal_printers import TerminalBase as t
from gwrqa.types.base import WorkflowConfigs
from gwrqa.utils import PathGenerators as path_gen
from gwrqa.validator.df_model import GWRQADFModel

console = Console()


class WorkflowBase(ABC):
    """
    Base workflow class that controls execution of the comparison. Each child class corresponds to one way of running
    it: a single municipality, or every municipality found in the raw extracts.
    """
    def __init__(self, configs: WorkflowConfigs):
        self.configs: WorkflowConfigs = configs
        self.dfs_in: dict[str, pd.DataFrame | None] = {}

    def load_dfs(self, load_map: dict[str, dict[str, Any]]) -> None:
        """
        Sets the self.dfs_in object. Sets keys as dataframe ID values. Sets values to dataframes, or None if the file
        path specified is not found.
        """
        for id, params in load_map.items():
            path: Path = params["path"]
            schema: Type[GWRQADFModel] = params["schema"]
            self.dfs_in[id] = ops_df.load_df(path, schema)
            if self.dfs_in[id] is not None:
                console.print(f"\"{id}\" successfully loaded from: \n{path}")

    def run_validator(self, id: str, df: pd.DataFrame, wkfl_name: str, schema: Type[GWRQADFModel]) -> None:
        """
        Executes pandera validator. On failure the failure cases and the offending rows are saved to the validation
        errors directory and the SchemaErrors exception is re-raised.
        """
        t.print_with_dots(f"Executing validator for {id} dataset")
        try:
            schema.validate(df, lazy=True)
            console.print("✅ Validation successful ✅")
        except pa.errors.SchemaErrors as err:
            console.print("❌ Validation failed ❌")
            console.print(f"Number of validation errors: {len(err.failure_cases)}")
            error_df: pd.DataFrame = err.failure_cases
            console.print(f"{error_df.head()}")
            error_indices: np.ndarray = error_df["index"].dropna().unique()
            error_rows_df: pd.DataFrame = df.loc[df.index.intersection(error_indices)]
            ops_df.save_df(error_df, path_gen.validation_errors(self.configs, wkfl_name, f"{id}_summary"))
            ops_df.save_df(error_rows_df, path_gen.validation_errors(self.configs, wkfl_name, f"{id}_error_rows"))
            raise

    @abstractmethod
    def execute(self) -> Any:
        pass


class WorkflowStandardBase(WorkflowBase):
    """Base class for workflows that follow the standard load->process->save pattern"""
    def execute(self) -> None:
        """Template method implementation"""
        self.load()
        self.process()
        self.summary_stats()
        self.save()

    @abstractmethod
    def load(self) -> None:
        """Loads data files into dataframes."""
        pass

    @abstractmethod
    def process(self) -> None:
        """Executes the comparison logic for the workflow."""
        pass

    @abstractmethod
    def summary_stats(self) -> None:
        """Executes summary stats builder for the workflow."""
        pass

    @abstractmethod
    def save(self) -> None:
        """Saves workflow outputs."""
        pass


class WkflMunicipalityCompare(WorkflowBase):
    """
    Compares the GWR and OSM addresses of a single municipality. The GWR index is built first, the OSM index second
    (OSM language variants are resolved against the GWR keys) and the two are then matched. Nothing is printed, so
    several municipalities can be compared at the same time.

    INPUTS:
        - GWR rows of the municipality
        - OSM building polygon rows and address node rows of the municipality
    OUTPUTS:
        - UnitResult (stats and match result)
        - 'OUTPUT/missing/{muni_ref}.geojson'
        - 'OUTPUT/warnings/{muni_ref}.geojson'
        - 'OUTPUT/matched/{muni_ref}.geojson'
    """

    def __init__(
        self,
        configs: WorkflowConfigs,
        muni_ref: str,
        gwr_rows: Iterable[Mapping[str, Any]],
        osm_polygon_rows: Iterable[Mapping[str, Any]] = (),
        osm_point_rows: Iterable[Mapping[str, Any]] = (),
        ordered: bool = False,
    ):
        super().__init__(configs)
        self.muni_ref: str = muni_ref
        self.gwr_rows = gwr_rows
        self.osm_polygon_rows = osm_polygon_rows
        self.osm_point_rows = osm_point_rows
        self.ordered: bool = ordered

    @classmethod
    def from_dfs(
        cls,
        configs: WorkflowConfigs,
        muni_ref: str,
        gwr_df: pd.DataFrame | None,
        osm_polygons_df: pd.DataFrame | None = None,
        osm_points_df: pd.DataFrame | None = None,
    ) -> "WkflMunicipalityCompare":
        def records(df: pd.DataFrame | None) -> list[dict]:
            return [] if df is None else ops_df.to_records(df)
        return cls(configs, muni_ref, records(gwr_df), records(osm_polygons_df), records(osm_points_df))

    def execute(self) -> UnitResult:
        loader = RegistryLoader(self.configs.get("official_valid_limit", DEFAULT_OFFICIAL_VALID_LIMIT), ordered=self.ordered)
        gwr_index = loader.load(self.gwr_rows)
        builder = OSMIndexBuilder(gwr_index.addresses, ordered=self.ordered)
        osm_buildings = builder.add_rows(self.osm_polygon_rows, OSM_GEOM_POLYGON)
        osm_nodes = builder.add_rows(self.osm_point_rows, OSM_GEOM_POINT)
        result = Matcher(gwr_index.addresses, builder.addresses, validated=gwr_index.validated).match()
        return UnitResult(
            muni_ref=self.muni_ref,
            muni_name=gwr_index.muni_name,
            canton=gwr_index.canton,
            stats=Stats.from_unit(gwr_index, osm_buildings, osm_nodes, result),
            result=result,
        )

    @classmethod
    def save(cls, configs: WorkflowConfigs, unit: UnitResult) -> list[str]:
        """Writes the GeoJSON files of one municipality. Returns the paths written."""
        return [
            geojson.write(unit.result.missing, path_gen.missing(configs, unit.muni_ref)),
            geojson.write(unit.result.warnings, path_gen.warnings(configs, unit.muni_ref)),
            geojson.write(
                unit.result.matching + unit.result.matching_ancillary,
                path_gen.matched(configs, unit.muni_ref),
            ),
        ]


class WkflCompareAll(WorkflowStandardBase):
    """
    Compares GWR and OSM addresses for every municipality found in the raw extracts, optionally restricted to one
    municipality by name. Municipality results are aggregated per canton and in total.

    INPUTS:
        - 'ROOT/raw/gwr_addresses[FileExt]'
        - 'ROOT/raw/osm_polygons[FileExt]'
        - 'ROOT/raw/osm_points[FileExt]'
    OUTPUTS:
        - 'OUTPUT/{missing,warnings,matched}/{muni_ref}.geojson'
        - 'OUTPUT/{missing,warnings}/{canton}.geojson'
        - 'ROOT/summary_stats/{municipalities,cantons,total}.csv'
    """

    WKFL_NAME: str = "GWR / OSM ADDRESS COMPARISON"
    WKFL_DESC: str = "Matches GWR addresses against OSM addresses per municipality and reports missing addresses and warnings."

    def __init__(self, configs: WorkflowConfigs):
        super().__init__(configs)
        self.aggregator: StatsAggregator = StatsAggregator()
        self.summary: SSCompare | None = None
        self.units: dict[str, dict[str, pd.DataFrame]] = {}
        self.saved_paths: list[str] = []
        t.print_workflow_name(self.WKFL_NAME, self.WKFL_DESC)

    @classmethod
    def canton_file_id(cls, canton: str) -> str:
        return "unknown" if canton == UNKNOWN_CANTON else canton

    def load(self) -> None:
        load_map: dict[str, dict[str, Any]] = {
            r.GWR_ADDRESSES: {
                "path": path_gen.raw_gwr_addresses(self.configs),
                "schema": GWRAddresses,
            },
            r.OSM_POLYGONS: {
                "path": path_gen.raw_osm_polygons(self.configs),
                "schema": OSMAddresses,
            },
            r.OSM_POINTS: {
                "path": path_gen.raw_osm_points(self.configs),
                "schema": OSMAddresses,
            },
        }
        self.load_dfs(load_map)
        if self.dfs_in[r.GWR_ADDRESSES] is None:
            raise FileNotFoundError(f"GWR addresses not found: {load_map[r.GWR_ADDRESSES]['path']}")
        for id, params in load_map.items():
            if self.dfs_in[id] is not None:
                self.run_validator(id, self.dfs_in[id], self.WKFL_NAME, params["schema"])

    def select_units(self) -> dict[str, dict[str, pd.DataFrame]]:
        """
        Partitions the raw dataframes by municipality number. If a municipality name is configured only the
        municipalities with that name (case-insensitive) are kept.
        """
        gwr_units = ops_df.split_by(self.dfs_in[r.GWR_ADDRESSES], g.GDENR)
        polygon_units = ops_df.split_by(self.dfs_in[r.OSM_POLYGONS], o.MUNI_REF)
        point_units = ops_df.split_by(self.dfs_in[r.OSM_POINTS], o.MUNI_REF)
        muni_refs = list(dict.fromkeys([*gwr_units.keys(), *polygon_units.keys(), *point_units.keys()]))
        municipality: str | None = self.configs.get("municipality")
        if municipality:
            wanted = municipality.strip().lower()
            muni_refs = [
                muni_ref for muni_ref in muni_refs
                if muni_ref in gwr_units
                and gwr_units[muni_ref][g.GDENAME].dropna().str.lower().eq(wanted).any()
            ]
            if not muni_refs:
                console.print(f"[yellow]No municipality named \"{municipality}\" found in GWR addresses[/yellow]")
        return {
            muni_ref: {
                r.GWR_ADDRESSES: gwr_units.get(muni_ref),
                r.OSM_POLYGONS: polygon_units.get(muni_ref),
                r.OSM_POINTS: point_units.get(muni_ref),
            }
            for muni_ref in muni_refs
        }

    def compare_unit(self, muni_ref: str) -> UnitResult:
        dfs = self.units[muni_ref]
        return WkflMunicipalityCompare.from_dfs(
            self.configs,
            muni_ref,
            dfs[r.GWR_ADDRESSES],
            dfs[r.OSM_POLYGONS],
            dfs[r.OSM_POINTS],
        ).execute()

    def collect(self, unit: UnitResult) -> None:
        """Aggregates and exports one municipality. Always called from the orchestrating thread."""
        self.aggregator.add_unit(unit)
        self.saved_paths.extend(WkflMunicipalityCompare.save(self.configs, unit))

    def process(self) -> None:
        t.print_equals("Comparing municipalities")
        self.units = self.select_units()
        workers: int = self.configs.get("workers", 1)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.completed}/{task.total}"),
            TimeElapsedColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Matching addresses...", total=len(self.units))
            if workers <= 1:
                for muni_ref in self.units:
                    self.collect(self.compare_unit(muni_ref))
                    progress.update(task, advance=1)
            else:
                with ThreadPoolExecutor(max_workers=workers) as executor:
                    futures = {executor.submit(self.compare_unit, muni_ref): muni_ref for muni_ref in self.units}
                    for future in as_completed(futures):
                        try:
                            self.collect(future.result())
                        except Exception:
                            progress.stop()
                            console.print(f"[red]Comparison failed for municipality {futures[future]}[/red]")
                            raise
                        progress.update(task, advance=1)
        console.print(f"Compared {len(self.units)} municipalities ✅")

    def summary_stats(self) -> None:
        self.summary = SSCompare(self.configs, self.WKFL_NAME, self.aggregator)
        self.summary.calculate()
        self.summary.print()

    def save(self) -> None:
        t.print_with_dots("Saving summary stats")
        for id, path in self.summary.save().items():
            console.print(f"\"{id}\" successfully saved to: \n{path}")
        t.print_with_dots("Saving cantonal GeoJSON files")
        for canton, missing in self.aggregator.cantonal_missing.items():
            file_id = self.canton_file_id(canton)
            self.saved_paths.append(geojson.write(missing, path_gen.missing(self.configs, file_id)))
            self.saved_paths.append(geojson.write(
                self.aggregator.cantonal_warnings.get(canton, []),
                path_gen.warnings(self.configs, file_id),
            ))
        console.print(f"{len(self.saved_paths)} GeoJSON files written ✅")
