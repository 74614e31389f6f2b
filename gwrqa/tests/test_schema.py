import pandas as pd
import pandera as pa
import pytest

from gwrqa.schema.raw import GWRAddresses, OSMAddresses
from gwrqa.services.dataframe.base import DataFrameOpsBase as ops_df


def test_boolean_fields():
    assert GWRAddresses.boolean_fields() == ["doffadr"]
    assert OSMAddresses.boolean_fields() == []


def test_coerce_booleans():
    df = pd.DataFrame({"doffadr": ["true", "False", None, "1"]})
    df = ops_df.coerce_booleans(df, ["doffadr", "unknown"])
    assert list(df["doffadr"]) == [True, False, False, True]


def test_gwr_schema_valid(gwr_row):
    df = pd.DataFrame([gwr_row(), gwr_row(egaid="2", deinr=None, plz4=None)]).astype({"doffadr": bool})
    GWRAddresses.validate(df, lazy=True)


def test_gwr_schema_invalid_coordinate(gwr_row):
    df = pd.DataFrame([gwr_row(lon="east")])
    with pytest.raises(pa.errors.SchemaErrors):
        GWRAddresses.validate(df, lazy=True)


def test_osm_schema_missing_id(osm_row):
    df = pd.DataFrame([osm_row(osm_id=None)])
    with pytest.raises(pa.errors.SchemaErrors):
        OSMAddresses.validate(df, lazy=True)


def test_split_by(osm_row):
    df = pd.DataFrame([osm_row(), osm_row(osm_id="2", muni_ref="351"), osm_row(osm_id="3", muni_ref=None)])
    units = ops_df.split_by(df, "muni_ref")
    assert set(units.keys()) == {"261", "351"}
    assert len(units["261"]) == 1
    assert ops_df.split_by(None, "muni_ref") == {}
