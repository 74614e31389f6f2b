from pathlib import Path
from typing import Type

import pandas as pd
from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TotalFileSizeColumn,
)

from gwrqa.constants.base import TRUE_STRINGS
from gwrqa.validator.df_model import GWRQADFModel

console = Console()


class DataFrameOpsBase(object):

    """
    Base dataframe operations class. Low-level dataframe functions that can be imported/used in other services classes
    without circular import issues.
    """

    @classmethod
    def coerce_booleans(cls, df: pd.DataFrame, bool_cols: list[str]) -> pd.DataFrame:
        for col in bool_cols:
            if col not in df.columns:
                continue
            df[col] = df[col].map(
                lambda x: str(x).strip().lower() in TRUE_STRINGS if pd.notnull(x) else False
            )
        return df

    @classmethod
    def load_df(
        cls,
        path: Path,
        schema: Type[GWRQADFModel] | None = None,
    ) -> pd.DataFrame | None:
        """
        Loads dataframes based on file format. Reads extension and loads dataframe using corresponding pd.read method.
        Returns None if the path doesn't exist or the file is empty. All columns are read as strings, boolean columns
        declared in the schema are coerced to bool.

        :param path: Complete path to data file to be loaded into dataframe (PathGenerators)
        :param schema: Pandera model whose boolean fields are coerced
        :return: Dataframe containing data from specified file
        """
        if not path.exists():
            console.print(f"[yellow]File not found: {path}[/yellow]")
            return None

        if path.stat().st_size == 0:
            console.print(f"[yellow]File is empty: {path}[/yellow]")
            return None

        file_size = path.stat().st_size
        format = path.suffix[1:].lower()
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TotalFileSizeColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task(
                f"Loading {path.name} into dataframe...",
                total=file_size,
                completed=0
            )
            try:
                if format == "csv":
                    df: pd.DataFrame = pd.read_csv(str(path), dtype=str, keep_default_na=True)
                elif format == "json":
                    df: pd.DataFrame = pd.read_json(str(path), dtype=str)
                else:
                    raise ValueError(f"Unsupported file format: {format}")
                progress.update(task, completed=file_size)
                if schema:
                    df = cls.coerce_booleans(df, schema.boolean_fields())
                return df
            except Exception as e:
                progress.stop()
                console.print(f"[red]Error loading {path.name}: {str(e)}[/red]")
                raise

    @classmethod
    def save_df(cls, df: pd.DataFrame, path: Path) -> str:
        """
        Saves dataframe to csv, creating the parent directory if needed.

        :param df: Dataframe to be saved
        :param path: Path to save dataframe, including file extension (PathGenerators)
        :return: Path to saved dataframe
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(str(path), index=False)
        return str(path)

    @classmethod
    def to_records(cls, df: pd.DataFrame) -> list[dict]:
        """Converts a dataframe to row dicts with None in place of NaN."""
        return df.astype(object).where(pd.notna(df), None).to_dict("records")

    @classmethod
    def split_by(cls, df: pd.DataFrame | None, col: str) -> dict[str, pd.DataFrame]:
        """Partitions a dataframe by the values of col. Rows with a null value in col are dropped."""
        if df is None or df.empty:
            return {}
        return {str(value): group for value, group in df.dropna(subset=[col]).groupby(col, sort=False)}
