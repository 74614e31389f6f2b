from dataclasses import dataclass
from typing import Any, Iterable

import pandas as pd

from gwrqa.constants.base import DEFAULT_OFFICIAL_VALID_LIMIT, GWR_LANGUAGES, UNKNOWN_CANTON
from gwrqa.constants.columns import GWRAddresses as g
from gwrqa.services.address import Address, AddressBase as addr, normalize_key
from gwrqa.services.dataframe.base import DataFrameOpsBase as ops_df
from gwrqa.services.multi_index import MultiIndex
from gwrqa.types.base import GWRRow, GWRState


@dataclass
class GWRIndex:
    """GWR addresses of one municipality, keyed by normalize_key(street, housenumber), plus load counters."""
    addresses: MultiIndex[str, Address]
    count: int = 0
    ancillary_count: int = 0
    no_number_count: int = 0
    official_count: int = 0
    validated: bool = False
    canton: str = UNKNOWN_CANTON
    muni_name: str | None = None

    @property
    def official_fraction(self) -> float | None:
        if self.count == 0:
            return None
        return self.official_count / self.count


class RegistryLoader:

    """
    Builds the GWR index for one municipality from raw GWR rows.

    The GWR export contains one row per address and language: a bilingual street produces two rows sharing the same
    EGAID. The first row becomes the address, later rows only contribute their street name in the per-language fields.
    """

    def __init__(self, official_valid_limit: float = DEFAULT_OFFICIAL_VALID_LIMIT, ordered: bool = False):
        if not 0 <= official_valid_limit <= 1:
            raise ValueError(f"official_valid_limit must be between 0 and 1, got {official_valid_limit}")
        self.official_valid_limit: float = official_valid_limit
        self.ordered: bool = ordered

    @classmethod
    def gwr_language(cls, code: Any) -> str | None:
        """Maps a GWR language code (STRSP) to a language tag, None for unknown codes."""
        text = addr.clean_value(code)
        if text is None:
            return None
        text = text.strip()
        if text.endswith(".0"):
            text = text[:-2]
        return GWR_LANGUAGES.get(text)

    @classmethod
    def build_address(cls, row: GWRRow) -> Address:
        return Address(
            external_id=addr.to_id(row.get(g.EGAID), g.EGAID),
            housenumber=addr.clean_value(row.get(g.DEINR)),
            street=addr.clean_value(row.get(g.STRNAME)),
            street_type=addr.clean_value(row.get(g.STRTYPE)),
            street_lang=cls.gwr_language(row.get(g.STRSP)),
            postcode=addr.clean_value(row.get(g.PLZ4)),
            city=addr.clean_value(row.get(g.PLZNAME)),
            gwr_category=addr.to_int(row.get(g.GKAT)),
            gwr_class=addr.to_int(row.get(g.GKLAS)),
            official=addr.to_bool(row.get(g.DOFFADR)),
            lon=addr.to_coordinate(row.get(g.LON), g.LON),
            lat=addr.to_coordinate(row.get(g.LAT), g.LAT),
            state=GWRState.UNPROCESSED,
        )

    @classmethod
    def fold_language(cls, address: Address, row: GWRRow) -> None:
        """Adds the street name of an additional-language row to an already loaded address."""
        if address.street is not None:
            # move the first row's street name to its language field
            if address.street_lang is not None:
                address.set_lang_street(address.street_lang, address.street)
            address.street = None
        lang = cls.gwr_language(row.get(g.STRSP))
        if lang is None:
            return
        address.set_lang_street(lang, addr.clean_value(row.get(g.STRNAME)))

    def load(self, rows: Iterable[GWRRow]) -> GWRIndex:
        index = GWRIndex(addresses=MultiIndex(ordered=self.ordered))
        seen: dict[str, Address] = {}
        for row in rows:
            egaid = addr.to_id(row.get(g.EGAID), g.EGAID)
            canton = addr.clean_value(row.get(g.GDEKT))
            if index.canton == UNKNOWN_CANTON and canton is not None:
                index.canton = canton
            if index.muni_name is None:
                index.muni_name = addr.clean_value(row.get(g.GDENAME))
            seen_address = seen.get(egaid)
            if seen_address is not None:
                self.fold_language(seen_address, row)
                continue
            if addr.clean_value(row.get(g.DEINR)) is None:
                index.no_number_count += 1
                continue
            address = self.build_address(row)
            if address.is_ancillary():
                index.ancillary_count += 1
            else:
                index.count += 1
                if address.official:
                    index.official_count += 1
            index.addresses.add(normalize_key(address.street, address.housenumber), address)
            seen[egaid] = address
        fraction = index.official_fraction
        index.validated = fraction is not None and fraction >= self.official_valid_limit
        return index

    def load_df(self, df: pd.DataFrame) -> GWRIndex:
        """Loads GWR rows from a dataframe, null values are passed through as None."""
        return self.load(ops_df.to_records(df))
