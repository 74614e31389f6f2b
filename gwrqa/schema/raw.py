import pandas as pd
import pandera as pa

from gwrqa.validator.df_model import GWRQADFModel


def _is_coordinate(series: pd.Series) -> pd.Series:
    return pd.to_numeric(series, errors="coerce").notna()


class GWRAddresses(GWRQADFModel):
    """
    Raw GWR address export. One row per address entrance and street language, already restricted to the compared
    municipalities and reprojected to WGS84. All columns are read as strings.
    """
    egid: str = pa.Field(
        nullable=True,
        required=False,
        title="EGID",
        description="Federal building identifier",
    )
    egaid: str = pa.Field(
        nullable=False,
        title="EGAID",
        description="Federal building address identifier. Repeated once per language for multilingual street names.",
    )
    esid: str = pa.Field(
        nullable=True,
        required=False,
        title="ESID",
        description="Federal street identifier",
    )
    gdekt: str = pa.Field(
        nullable=True,
        title="Canton",
        description="Two-letter canton code",
    )
    gdenr: str = pa.Field(
        nullable=False,
        title="Municipality Number",
        description="BFS municipality number, used to partition the rows by municipality",
    )
    gdename: str = pa.Field(
        nullable=True,
        title="Municipality Name",
    )
    strname: str = pa.Field(
        nullable=True,
        title="Street Name",
        description="Street or place name in the language given by strsp",
    )
    deinr: str = pa.Field(
        nullable=True,
        title="Entrance Number",
        description="House number. Rows without a number are counted but not compared.",
    )
    plz4: str = pa.Field(
        nullable=True,
        title="Postcode",
    )
    plzz: str = pa.Field(
        nullable=True,
        required=False,
        title="Postcode Addition",
    )
    plzname: str = pa.Field(
        nullable=True,
        title="Locality Name",
    )
    strsp: str = pa.Field(
        nullable=True,
        title="Street Language",
        description="GWR language code of the street name: 9901 de, 9902 rm, 9903 fr, 9904 it",
    )
    strtype: str = pa.Field(
        nullable=True,
        title="Street Geometry Type",
        description="swisstopo street geometry type. 'Street' for real streets, anything else is a place name.",
    )
    gkat: str = pa.Field(
        nullable=True,
        title="Building Category",
    )
    gklas: str = pa.Field(
        nullable=True,
        title="Building Class",
    )
    doffadr: bool = pa.Field(
        nullable=True,
        title="Official Address",
        description="Official address flag",
    )
    lon: str = pa.Field(
        nullable=False,
        title="Longitude",
        description="WGS84 longitude",
    )
    lat: str = pa.Field(
        nullable=False,
        title="Latitude",
        description="WGS84 latitude",
    )

    @pa.check("lon", "lat", name="is_coordinate")
    def check_coordinates(cls, series: pd.Series) -> pd.Series:
        return _is_coordinate(series)

    class Config:
        # every column is read as text, coercion only normalizes the string dtype
        strict = False
        coerce = True


class OSMAddresses(GWRQADFModel):
    """
    Raw OSM address export. One row per addressed building polygon (osm_polygons) or address node (osm_points). The
    housenumber column may hold several numbers separated by ';' or ','.
    """
    osm_id: str = pa.Field(
        nullable=False,
        title="OSM ID",
    )
    muni_ref: str = pa.Field(
        nullable=False,
        title="Municipality Number",
        description="BFS number of the municipality boundary containing the object",
    )
    housenumber: str = pa.Field(nullable=True, title="addr:housenumber")
    housename: str = pa.Field(nullable=True, required=False, title="addr:housename")
    street: str = pa.Field(nullable=True, title="addr:street")
    street_de: str = pa.Field(nullable=True, required=False, title="addr:street:de")
    street_fr: str = pa.Field(nullable=True, required=False, title="addr:street:fr")
    street_it: str = pa.Field(nullable=True, required=False, title="addr:street:it")
    street_rm: str = pa.Field(nullable=True, required=False, title="addr:street:rm")
    place: str = pa.Field(nullable=True, title="addr:place")
    place_de: str = pa.Field(nullable=True, required=False, title="addr:place:de")
    place_fr: str = pa.Field(nullable=True, required=False, title="addr:place:fr")
    place_it: str = pa.Field(nullable=True, required=False, title="addr:place:it")
    place_rm: str = pa.Field(nullable=True, required=False, title="addr:place:rm")
    postcode: str = pa.Field(nullable=True, title="addr:postcode")
    city: str = pa.Field(nullable=True, title="addr:city")
    full: str = pa.Field(nullable=True, required=False, title="addr:full")
    lon: str = pa.Field(
        nullable=False,
        title="Longitude",
        description="WGS84 longitude of the node or the polygon centroid",
    )
    lat: str = pa.Field(
        nullable=False,
        title="Latitude",
        description="WGS84 latitude of the node or the polygon centroid",
    )

    @pa.check("lon", "lat", name="is_coordinate")
    def check_coordinates(cls, series: pd.Series) -> pd.Series:
        return _is_coordinate(series)

    class Config:
        strict = False
        coerce = True
