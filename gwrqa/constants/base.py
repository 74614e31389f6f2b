import re
from typing import Final

CONFIGS_FILENAME: Final[str] = "configs.json"

# mean of the two WGS84 reference-ellipsoid radii, in meters
EARTH_RADIUS_EQUATOR: Final[int] = 6378137
EARTH_RADIUS_POLAR: Final[int] = 6356752
EARTH_RADIUS: Final[float] = (EARTH_RADIUS_EQUATOR + EARTH_RADIUS_POLAR) / 2

# fraction of addresses that have to carry the official flag for the flag to be trusted in a municipality
DEFAULT_OFFICIAL_VALID_LIMIT: Final[float] = 0.8
MATCHING_DISTANCE: Final[int] = 50
DEFAULT_WORKERS: Final[int] = 1
UNKNOWN_CANTON: Final[str] = "?"

LANG_DE: Final[str] = "de"
LANG_FR: Final[str] = "fr"
LANG_IT: Final[str] = "it"
LANG_RM: Final[str] = "rm"

GWR_LANGUAGES: dict[str, str] = {
    "9901": LANG_DE,
    "9902": LANG_RM,
    "9903": LANG_FR,
    "9904": LANG_IT,
}

# order in which GWR street names are probed against OSM candidates
GWR_LANGUAGE_ORDER: tuple[str, ...] = (LANG_DE, LANG_RM, LANG_FR, LANG_IT)
# order in which OSM name variants are probed against the GWR index
OSM_LANGUAGE_ORDER: tuple[str, ...] = (LANG_DE, LANG_FR, LANG_IT, LANG_RM)

SWISSTOPO_STREET_GEOM: Final[str] = "Street"

OSM_GEOM_POLYGON: Final[str] = "polygon"
OSM_GEOM_POINT: Final[str] = "point"

# GKAT / GKLAS codes marking a secondary (non-principal) address
ANCILLARY_CATEGORIES: frozenset[int] = frozenset({1010, 1080})
ANCILLARY_CLASSES: frozenset[int] = frozenset({1242, 1252})
ANCILLARY_NUMBER: re.Pattern = re.compile(r"^[^.]+[.,].*$")

HOUSENUMBER_SEPARATORS: re.Pattern = re.compile(r"[;,]")
WHITESPACE: re.Pattern = re.compile(r"\s")

TRUE_STRINGS: frozenset[str] = frozenset({"true", "1", "t", "yes", "y"})
