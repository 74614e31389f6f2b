from typing import Any, Iterable, Mapping

import pandas as pd

from gwrqa.constants.base import HOUSENUMBER_SEPARATORS, OSM_LANGUAGE_ORDER, WHITESPACE
from gwrqa.constants.columns import OSMAddresses as o
from gwrqa.services.address import Address, AddressBase as addr, normalize_key
from gwrqa.services.dataframe.base import DataFrameOpsBase as ops_df
from gwrqa.services.multi_index import MultiIndex
from gwrqa.types.base import OSMRow, OSMState


class OSMIndexBuilder:

    """
    Builds the OSM address index for one municipality.

    Building polygons and address nodes are added through the same builder, tagged with their geometry source. The GWR
    index of the municipality is needed up front: multilingual OSM names (addr:street:de, addr:street:fr, ...) are
    resolved to whichever variant the GWR actually uses, which is what makes bilingual towns like Biel/Bienne match.
    """

    def __init__(self, gwr_addresses: MultiIndex[str, Address], ordered: bool = False):
        self.gwr_addresses: MultiIndex[str, Address] = gwr_addresses
        self.addresses: MultiIndex[str, Address] = MultiIndex(ordered=ordered)

    @classmethod
    def split_housenumbers(cls, housenumber: str) -> list[str]:
        """
        Splits an OSM housenumber list into single numbers, removing all whitespace.

        Examples:
            '5;7' -> ['5', '7']
            '12 A, 14' -> ['12A', '14']
            '5;' -> ['5', '']
        """
        return [WHITESPACE.sub("", number) for number in HOUSENUMBER_SEPARATORS.split(housenumber)]

    def resolve_name(self, row: Mapping[str, Any], prefix: str, number: str | None) -> tuple[str | None, str | None]:
        """
        Returns the street (or place) name to match with and its language. The untagged name is used unless a
        language variant combined with the number is a key of the GWR index, first variant wins.
        """
        for lang in OSM_LANGUAGE_ORDER:
            variant = addr.clean_value(row.get(f"{prefix}_{lang}"))
            if variant is not None and self.gwr_addresses.contains_key(normalize_key(variant, number)):
                return variant, lang
        return addr.clean_value(row.get(prefix)), None

    def build_address(self, row: OSMRow, osm_geom: str, housenumber: str | None) -> Address:
        housename = addr.clean_value(row.get(o.HOUSENAME))
        address = Address(
            external_id=addr.to_id(row.get(o.OSM_ID), o.OSM_ID),
            osm_geom=osm_geom,
            housenumber=housenumber,
            housename=housename,
            postcode=addr.clean_value(row.get(o.POSTCODE)),
            city=addr.clean_value(row.get(o.CITY)),
            full=addr.clean_value(row.get(o.FULL)),
            lon=addr.to_coordinate(row.get(o.LON), o.LON),
            lat=addr.to_coordinate(row.get(o.LAT), o.LAT),
            state=OSMState.UNPROCESSED,
        )
        address.street, street_lang = self.resolve_name(row, o.STREET, housenumber)
        address.place, place_lang = self.resolve_name(row, o.PLACE, housenumber)
        # a resolved place name wins over a resolved street name
        address.street_lang = place_lang or street_lang
        return address

    @classmethod
    def address_key(cls, address: Address) -> str:
        name = address.street if address.street is not None else address.place
        number = address.housenumber if address.housenumber is not None else address.housename
        return normalize_key(name, number)

    def add_row(self, row: OSMRow, osm_geom: str) -> list[Address]:
        housenumber = addr.clean_value(row.get(o.HOUSENUMBER))
        numbers: list[str | None] = []
        if housenumber is not None:
            numbers = [number for number in self.split_housenumbers(housenumber) if number]
        if not numbers:
            numbers = [None]
        added = []
        for number in numbers:
            address = self.build_address(row, osm_geom, number)
            self.addresses.add(self.address_key(address), address)
            added.append(address)
        return added

    def add_rows(self, rows: Iterable[OSMRow], osm_geom: str) -> int:
        """Adds all rows of one geometry source. Returns the number of OSM objects (not addresses) read."""
        count = 0
        for row in rows:
            count += 1
            self.add_row(row, osm_geom)
        return count

    def add_df(self, df: pd.DataFrame, osm_geom: str) -> int:
        return self.add_rows(ops_df.to_records(df), osm_geom)
