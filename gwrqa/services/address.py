from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from gwrqa.constants.base import (
    ANCILLARY_CATEGORIES,
    ANCILLARY_CLASSES,
    ANCILLARY_NUMBER,
    EARTH_RADIUS,
    SWISSTOPO_STREET_GEOM,
    TRUE_STRINGS,
    LANG_DE,
    LANG_FR,
    LANG_IT,
    LANG_RM,
)
from gwrqa.types.base import GWRState, OSMState


def normalize_key(name: str | None, number: str | None) -> str:
    """
    Creates the key used for matching GWR and OSM addresses. Missing components are rendered as empty strings so that
    the key is stable for incomplete addresses.

    Examples:
        ('Hauptstrasse', '5') -> 'hauptstrasse 5'
        ('Rue du Marché', '12A') -> 'rue du marché 12a'
        (None, '5') -> ' 5'
    """
    name = "" if name is None else name
    number = "" if number is None else number
    return f"{name} {number}".lower()


def haversine_distance(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Returns the great-circle distance between two WGS84 points in meters."""
    lon1, lat1, lon2, lat2 = (np.float64(v) for v in (lon1, lat1, lon2, lat2))
    d_lat = np.radians(lat2 - lat1)
    d_lon = np.radians(lon2 - lon1)
    a = np.sin(d_lat / 2) ** 2 + np.sin(d_lon / 2) ** 2 * np.cos(np.radians(lat1)) * np.cos(np.radians(lat2))
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return float(EARTH_RADIUS * c)


@dataclass(eq=False)
class Address:
    """
    A single GWR or OSM address. Addresses are compared and hashed by identity: two entries with identical values are
    still two different addresses.
    """
    external_id: str | None = None
    osm_geom: str | None = None
    housenumber: str | None = None
    housename: str | None = None
    street: str | None = None
    street_de: str | None = None
    street_fr: str | None = None
    street_it: str | None = None
    street_rm: str | None = None
    street_lang: str | None = None
    street_type: str | None = None
    place: str | None = None
    postcode: str | None = None
    city: str | None = None
    full: str | None = None
    gwr_category: int = 0
    gwr_class: int = 0
    official: bool = False
    lon: np.float32 = field(default_factory=lambda: np.float32(0))
    lat: np.float32 = field(default_factory=lambda: np.float32(0))
    state: GWRState | OSMState | None = None

    def __str__(self) -> str:
        return f"{self.housenumber} {self.street}"

    def is_ancillary(self) -> bool:
        """Returns True for secondary GWR addresses (service entrances, sub-numbers like '12.a')."""
        if self.gwr_category in ANCILLARY_CATEGORIES or self.gwr_class in ANCILLARY_CLASSES:
            return True
        return self.housenumber is not None and ANCILLARY_NUMBER.search(self.housenumber) is not None

    def is_street_geom(self) -> bool:
        """True if the GWR street is a real street, False if it is a place name (addr:place in OSM)."""
        return self.street_type == SWISSTOPO_STREET_GEOM

    def get_lang_street(self, lang: str) -> str | None:
        return getattr(self, f"street_{lang}")

    def set_lang_street(self, lang: str, value: str | None) -> None:
        if lang not in (LANG_DE, LANG_FR, LANG_IT, LANG_RM):
            raise ValueError(f"Unsupported street language: {lang}")
        setattr(self, f"street_{lang}", value)

    def distance_to(self, other: "Address") -> float:
        return haversine_distance(self.lon, self.lat, other.lon, other.lat)


@dataclass(eq=False)
class AddressWarning:
    """Discrepancies found for one OSM address."""
    osm_geom: str | None
    external_id: str | None
    lon: np.float32
    lat: np.float32
    postcode: bool = False
    osm_postcode: str | None = None
    gwr_postcode: str | None = None
    city: bool = False
    osm_city: str | None = None
    gwr_city: str | None = None
    place: bool = False
    distance: bool = False
    no_street: bool = False
    not_official: bool = False
    non_gwr: bool = False

    @classmethod
    def for_address(cls, address: Address) -> "AddressWarning":
        return cls(address.osm_geom, address.external_id, address.lon, address.lat)

    def has_warning(self) -> bool:
        return (
            self.postcode
            or self.city
            or self.place
            or self.distance
            or self.no_street
            or self.not_official
            or self.non_gwr
        )


class AddressBase:

    """Value coercion helpers shared by the GWR and OSM row readers."""

    @classmethod
    def clean_value(cls, value: Any) -> str | None:
        """Returns None for null-like values (None, NaN, empty strings), otherwise the value as a string."""
        if value is None:
            return None
        if not isinstance(value, str) and pd.isna(value):
            return None
        text = str(value)
        if text.strip() == "":
            return None
        return text

    @classmethod
    def to_int(cls, value: Any, default: int = 0) -> int:
        text = cls.clean_value(value)
        if text is None:
            return default
        try:
            return int(float(text))
        except ValueError:
            return default

    @classmethod
    def to_bool(cls, value: Any) -> bool:
        if isinstance(value, (bool, np.bool_)):
            return bool(value)
        text = cls.clean_value(value)
        if text is None:
            return False
        return text.strip().lower() in TRUE_STRINGS

    @classmethod
    def to_coordinate(cls, value: Any, column: str) -> np.float32:
        """Coordinates are required; a missing or unparsable value means the upstream export is broken."""
        text = cls.clean_value(value)
        if text is None:
            raise ValueError(f"Missing coordinate in column \"{column}\"")
        try:
            return np.float32(float(text))
        except ValueError as e:
            raise ValueError(f"Invalid coordinate in column \"{column}\": {value!r}") from e

    @classmethod
    def to_id(cls, value: Any, column: str) -> str:
        text = cls.clean_value(value)
        if text is None:
            raise ValueError(f"Missing identifier in column \"{column}\"")
        # ids read from csv as floats ("1234.0") are normalized back to integers
        if text.endswith(".0") and text[:-2].lstrip("-").isdigit():
            return text[:-2]
        return text
