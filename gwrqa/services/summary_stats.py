from abc import abstractmethod
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import pandas as pd
from rich.console import Console
from rich.table import Table

from gwrqa.constants.columns import StatsColumns as sc
from gwrqa.constants.files import SummaryStats as ssf
from gwrqa.services.address import Address, AddressWarning
from gwrqa.services.dataframe.base import DataFrameOpsBase as ops_df
from gwrqa.services.match import MatchResult
from gwrqa.services.registry import GWRIndex
from gwrqa.types.base import WorkflowConfigs
from gwrqa.utils import PathGenerators as path_gen


console = Console()


@dataclass
class Stats:
    """Address counters. The same shape is used per municipality, per canton and for the total."""
    gwr: int = 0
    gwr_ancillary: int = 0
    gwr_duplicates: int = 0
    gwr_no_number: int = 0
    osm_buildings: int = 0
    osm_nodes: int = 0
    matching: int = 0
    matching_ancillary: int = 0
    missing: int = 0
    postcode: int = 0
    city: int = 0
    distance: int = 0
    place: int = 0
    no_street: int = 0
    not_official: int = 0
    non_gwr: int = 0
    warnings: int = 0

    @classmethod
    def from_unit(cls, gwr_index: GWRIndex, osm_buildings: int, osm_nodes: int, result: MatchResult) -> "Stats":
        return cls(
            gwr=gwr_index.count,
            gwr_ancillary=gwr_index.ancillary_count,
            gwr_duplicates=result.duplicates,
            gwr_no_number=gwr_index.no_number_count,
            osm_buildings=osm_buildings,
            osm_nodes=osm_nodes,
            matching=len(result.matching),
            matching_ancillary=len(result.matching_ancillary),
            missing=len(result.missing),
            postcode=result.postcode,
            city=result.city,
            distance=result.distance,
            place=result.place,
            no_street=result.no_street,
            not_official=result.not_official,
            non_gwr=result.non_gwr,
            warnings=len(result.warnings),
        )

    def add(self, other: "Stats") -> None:
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))

    @property
    def osm_total(self) -> int:
        return self.osm_buildings + self.osm_nodes

    @property
    def match_percentage(self) -> float | None:
        """Matching GWR addresses in percent of the de-duplicated GWR addresses, None if there are none."""
        denominator = self.gwr - self.gwr_duplicates
        if denominator <= 0:
            return None
        return self.matching * 100 / denominator

    @property
    def density(self) -> float | None:
        if self.gwr == 0:
            return None
        return self.matching / self.gwr

    def to_row(self) -> dict[str, Any]:
        row: dict[str, Any] = {f.name: getattr(self, f.name) for f in fields(self)}
        row[sc.OSM_TOTAL] = self.osm_total
        row[sc.MATCHING_PCT] = self.match_percentage
        row[sc.DENSITY] = self.density
        return row


@dataclass
class UnitResult:
    """Everything produced for one municipality."""
    muni_ref: str
    muni_name: str | None
    canton: str
    stats: Stats
    result: MatchResult


@dataclass
class UnitSummary:
    muni_ref: str
    muni_name: str | None
    canton: str
    stats: Stats


@dataclass
class StatsAggregator:
    """
    Accumulates municipality results into canton and total counters. Counters are only ever added to. Cantonal
    missing addresses and warnings are collected as well so they can be exported per canton.
    """
    total: Stats = field(default_factory=Stats)
    cantonal: dict[str, Stats] = field(default_factory=dict)
    units: list[UnitSummary] = field(default_factory=list)
    cantonal_missing: dict[str, list[Address]] = field(default_factory=dict)
    cantonal_warnings: dict[str, list[AddressWarning]] = field(default_factory=dict)

    def canton_stats(self, canton: str) -> Stats:
        return self.cantonal.setdefault(canton, Stats())

    def add_unit(self, unit: UnitResult) -> None:
        self.total.add(unit.stats)
        self.canton_stats(unit.canton).add(unit.stats)
        self.units.append(UnitSummary(unit.muni_ref, unit.muni_name, unit.canton, unit.stats))
        self.cantonal_missing.setdefault(unit.canton, []).extend(unit.result.missing)
        self.cantonal_warnings.setdefault(unit.canton, []).extend(unit.result.warnings)

    def merge(self, other: "StatsAggregator") -> None:
        """Folds another aggregator (e.g. from a different worker) into this one."""
        self.total.add(other.total)
        for canton, stats in other.cantonal.items():
            self.canton_stats(canton).add(stats)
        self.units.extend(other.units)
        for canton, missing in other.cantonal_missing.items():
            self.cantonal_missing.setdefault(canton, []).extend(missing)
        for canton, warnings in other.cantonal_warnings.items():
            self.cantonal_warnings.setdefault(canton, []).extend(warnings)

    def units_df(self) -> pd.DataFrame:
        rows = []
        for unit in sorted(self.units, key=lambda u: (u.muni_name or "", u.muni_ref)):
            row = {sc.NAME: unit.muni_name, sc.MUNI_REF: unit.muni_ref, sc.CANTON: unit.canton}
            row.update(unit.stats.to_row())
            rows.append(row)
        return pd.DataFrame(rows)

    def cantons_df(self) -> pd.DataFrame:
        rows = []
        for canton in sorted(self.cantonal.keys()):
            row = {sc.CANTON: canton}
            row.update(self.cantonal[canton].to_row())
            rows.append(row)
        return pd.DataFrame(rows)

    def total_df(self) -> pd.DataFrame:
        row = {sc.NAME: "TOTAL"}
        row.update(self.total.to_row())
        return pd.DataFrame([row])


class SummaryStatsBase(object):

    # column id, display name, style
    TABLE_COLUMNS: list[tuple[str, str, str | None]] = [
        (sc.GWR, "GWR", "bold"),
        (sc.GWR_ANCILLARY, "GWR ancillary", None),
        (sc.GWR_DUPLICATES, "GWR duplicates", None),
        (sc.GWR_NO_NUMBER, "GWR without number", None),
        (sc.OSM_TOTAL, "OSM total", "bold"),
        (sc.OSM_BUILDINGS, "OSM buildings", None),
        (sc.OSM_NODES, "OSM nodes", None),
        (sc.MATCHING, "Matching", "bold green"),
        (sc.MATCHING_PCT, "% Matching", "green"),
        (sc.MATCHING_ANCILLARY, "Matching ancillary", None),
        (sc.MISSING, "Missing", "bold red"),
        (sc.POSTCODE, "Different or missing postcode", None),
        (sc.CITY, "Different or missing city", None),
        (sc.DISTANCE, "Distance more than 50 m", None),
        (sc.PLACE, "addr:street instead of addr:place", None),
        (sc.NO_STREET, "addr:street/addr:place missing", None),
        (sc.NOT_OFFICIAL, "Not official", None),
        (sc.NON_GWR, "Non-GWR", None),
        (sc.WARNINGS, "Warnings total", "bold yellow"),
    ]

    @classmethod
    def format_value(cls, column: str, value: Any) -> str:
        if column == sc.MATCHING_PCT:
            # percentages are truncated, "-" if there is nothing to compare against
            return "-" if value is None or pd.isna(value) else str(int(value))
        return f"{int(value):,}"

    @classmethod
    def build_table(cls, title: str, df: pd.DataFrame, label_cols: list[tuple[str, str]]) -> Table:
        table = Table(title=title)
        for _, display_name in label_cols:
            table.add_column(display_name, justify="left", style="bold yellow")
        for _, display_name, style in cls.TABLE_COLUMNS:
            table.add_column(display_name, justify="right", style=style)
        for _, row in df.iterrows():
            labels = ["" if pd.isna(row[col]) else str(row[col]) for col, _ in label_cols]
            values = [cls.format_value(col, row[col]) for col, _, _ in cls.TABLE_COLUMNS]
            table.add_row(*labels, *values)
        return table

    @abstractmethod
    def calculate(self) -> None:
        pass

    @abstractmethod
    def print(self) -> None:
        pass

    @abstractmethod
    def save(self) -> None:
        pass


class SSCompare(SummaryStatsBase):

    """Summary stats of a full comparison run: one table per municipality, one per canton and the total."""

    def __init__(self, configs: WorkflowConfigs, wkfl_name: str, aggregator: StatsAggregator):
        super().__init__()
        self.configs: WorkflowConfigs = configs
        self.wkfl_name: str = wkfl_name
        self.aggregator: StatsAggregator = aggregator
        self.dfs: dict[str, pd.DataFrame] = {}

    def calculate(self) -> None:
        self.dfs = {
            ssf.MUNICIPALITIES: self.aggregator.units_df(),
            ssf.CANTONS: self.aggregator.cantons_df(),
            ssf.TOTAL: self.aggregator.total_df(),
        }

    def print(self) -> None:
        console.print("\n")
        if not self.dfs[ssf.MUNICIPALITIES].empty:
            console.print(self.build_table(
                f"Summary Stats: {self.wkfl_name}",
                self.dfs[ssf.MUNICIPALITIES],
                [(sc.NAME, "Municipality"), (sc.CANTON, "Canton")],
            ))
            console.print("\n")
        if not self.dfs[ssf.CANTONS].empty:
            console.print(self.build_table("Cantons", self.dfs[ssf.CANTONS], [(sc.CANTON, "Canton")]))
            console.print("\n")
        console.print(self.build_table("Total", self.dfs[ssf.TOTAL], [(sc.NAME, "")]))
        console.print("\n")

    def save(self) -> dict[str, Path]:
        paths: dict[str, Path] = {}
        for id, df in self.dfs.items():
            path: Path = path_gen.summary_stats(self.configs, id)
            ops_df.save_df(df, path)
            paths[id] = path
        return paths
