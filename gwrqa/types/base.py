from enum import StrEnum
from pathlib import Path
from typing import TypedDict, Literal, Any


FileExt = Literal["csv", "json", "geojson"]


class WorkflowConfigs(TypedDict, total=False):
    data_root: Path
    output_root: Path
    load_ext: FileExt
    official_valid_limit: float
    municipality: str | None
    workers: int


class GWRRow(TypedDict, total=False):
    """One row of the GWR address export. Multilingual addresses appear once per language under the same egaid."""
    egid: str | None
    egaid: str
    esid: str | None
    gdekt: str | None
    gdenr: str
    gdename: str | None
    strname: str | None
    deinr: str | None
    plz4: str | None
    plzz: str | None
    plzname: str | None
    strsp: str | None
    strtype: str | None
    gkat: int | str | None
    gklas: int | str | None
    doffadr: bool | str | None
    lon: float
    lat: float


class OSMRow(TypedDict, total=False):
    """One addressed OSM object (building polygon or node). housenumber may hold several numbers."""
    osm_id: str | int
    muni_ref: str
    housenumber: str | None
    housename: str | None
    street: str | None
    street_de: str | None
    street_fr: str | None
    street_it: str | None
    street_rm: str | None
    place: str | None
    place_de: str | None
    place_fr: str | None
    place_it: str | None
    place_rm: str | None
    postcode: str | None
    city: str | None
    full: str | None
    lon: float
    lat: float


class GWRState(StrEnum):
    """Terminal states of a GWR address within one municipality pass."""
    UNPROCESSED = "unprocessed"
    MATCHED = "matched"
    MATCHED_ANCILLARY = "matched_ancillary"
    MISSING = "missing"
    DUPLICATE = "duplicate"
    UNMATCHED = "unmatched"  # not matched, but suppressed from the missing list


class OSMState(StrEnum):
    """Terminal states of an OSM address within one municipality pass."""
    UNPROCESSED = "unprocessed"
    MATCHED = "matched"
    WARNED = "warned"
    NO_STREET = "no_street"
    NON_GWR = "non_gwr"


class GeoJsonGeometry(TypedDict):
    type: Literal["Point"]
    coordinates: list[float]


class GeoJsonFeature(TypedDict):
    type: Literal["Feature"]
    properties: dict[str, Any]
    geometry: GeoJsonGeometry


class GeoJsonFeatureCollection(TypedDict):
    type: Literal["FeatureCollection"]
    features: list[GeoJsonFeature]
