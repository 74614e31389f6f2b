from dataclasses import dataclass, field

from gwrqa.constants.base import GWR_LANGUAGE_ORDER, MATCHING_DISTANCE
from gwrqa.services.address import Address, AddressWarning, normalize_key
from gwrqa.services.multi_index import MultiIndex
from gwrqa.types.base import GWRState, OSMState


@dataclass(eq=False)
class MatchedPair:
    gwr: Address
    osm: Address
    distance: float


@dataclass
class MatchResult:
    """Outcome of matching one municipality."""
    matching: list[MatchedPair] = field(default_factory=list)
    matching_ancillary: list[MatchedPair] = field(default_factory=list)
    missing: list[Address] = field(default_factory=list)
    warnings: list[AddressWarning] = field(default_factory=list)
    duplicates: int = 0
    postcode: int = 0
    city: int = 0
    distance: int = 0
    place: int = 0
    no_street: int = 0
    not_official: int = 0
    non_gwr: int = 0


class MatchBase:

    @classmethod
    def id_sort_key(cls, address: Address) -> tuple[int, int, str]:
        """Sort key ordering numeric ids numerically, then other ids, then addresses without id."""
        external_id = address.external_id
        if external_id is None:
            return 2, 0, ""
        if external_id.isdigit():
            return 0, int(external_id), external_id
        return 1, 0, external_id

    @classmethod
    def remove_duplicates(cls, gwr_addresses: MultiIndex[str, Address]) -> int:
        """
        Removes duplicate GWR addresses: entries with the same key and the same postcode. The entry with the lowest id
        is kept. Returns the number of removed entries.
        """
        removed = 0
        for key in gwr_addresses.keys():
            same_key = gwr_addresses.get_list(key)
            if len(same_key) < 2:
                continue
            same_postcode: MultiIndex[str | None, Address] = MultiIndex()
            for address in same_key:
                same_postcode.add(address.postcode, address)
            for postcode, dups in same_postcode.items():
                if len(dups) < 2:
                    continue
                keep = min(dups, key=cls.id_sort_key)
                for address in dups:
                    if address is keep:
                        continue
                    if gwr_addresses.remove_item(key, address):
                        address.state = GWRState.DUPLICATE
                        removed += 1
        return removed

    @classmethod
    def postcode_matches(cls, gwr: Address, osm: Address) -> bool:
        return gwr.postcode is not None and gwr.postcode == osm.postcode

    @classmethod
    def city_matches(cls, gwr: Address, osm: Address) -> bool:
        return gwr.city is not None and gwr.city == osm.city


class Matcher(MatchBase):

    """
    Matches the GWR addresses of one municipality against the OSM addresses of the same municipality.

    Both indices are consumed: matched GWR addresses and every OSM address that was matched or compared are removed.
    What is left in the OSM index after matching are the OSM addresses that do not exist in the GWR.
    """

    def __init__(
        self,
        gwr_addresses: MultiIndex[str, Address],
        osm_addresses: MultiIndex[str, Address],
        validated: bool = False,
        matching_distance: float = MATCHING_DISTANCE,
    ):
        self.gwr_addresses: MultiIndex[str, Address] = gwr_addresses
        self.osm_addresses: MultiIndex[str, Address] = osm_addresses
        self.validated: bool = validated
        self.matching_distance: float = matching_distance

    def is_admissible(self, gwr: Address, osm: Address) -> tuple[bool, float]:
        """An OSM address is a match candidate if the postcode is the same or it is close enough."""
        distance = gwr.distance_to(osm)
        return self.postcode_matches(gwr, osm) or distance <= self.matching_distance, distance

    def candidate_key(self, gwr: Address) -> str | None:
        """
        Returns the key under which OSM candidates for the GWR address are looked up. Multilingual GWR addresses have
        no untagged street, the first language variant with OSM candidates is used.
        """
        if gwr.street is not None:
            return normalize_key(gwr.street, gwr.housenumber)
        for lang in GWR_LANGUAGE_ORDER:
            street = gwr.get_lang_street(lang)
            if street is None:
                continue
            key = normalize_key(street, gwr.housenumber)
            if self.osm_addresses.get(key):
                return key
        return None

    def select_match(self, gwr: Address, key: str) -> tuple[Address | None, float | None]:
        """Returns the closest admissible OSM address for key and its distance."""
        closest: Address | None = None
        lowest_distance: float | None = None
        for osm in self.osm_addresses.get_list(key):
            admissible, distance = self.is_admissible(gwr, osm)
            if not admissible:
                continue
            if lowest_distance is None or distance < lowest_distance:
                closest = osm
                lowest_distance = distance
        return closest, lowest_distance

    def check_candidates(self, gwr: Address, key: str, result: MatchResult) -> None:
        """
        Compares the GWR address with every admissible OSM address under key, records warnings and removes the
        compared OSM addresses from the index.
        """
        ancillary = gwr.is_ancillary()
        for osm in self.osm_addresses.get_list(key):
            admissible, distance = self.is_admissible(gwr, osm)
            if not admissible:
                continue
            warning = AddressWarning.for_address(osm)
            if not self.postcode_matches(gwr, osm):
                result.postcode += 1
                warning.postcode = True
                warning.osm_postcode = osm.postcode
                warning.gwr_postcode = gwr.postcode
            if not self.city_matches(gwr, osm):
                result.city += 1
                warning.city = True
                warning.osm_city = osm.city
                warning.gwr_city = gwr.city
            if distance > self.matching_distance:
                result.distance += 1
                warning.distance = True
            if not gwr.is_street_geom() and osm.place is None:
                result.place += 1
                warning.place = True
            warning.not_official = not gwr.official
            if warning.not_official and not ancillary:
                result.not_official += 1
            if warning.has_warning():
                result.warnings.append(warning)
            self.osm_addresses.remove_item(key, osm)
            osm.state = OSMState.WARNED

    def match_address(self, gwr_key: str, gwr: Address, result: MatchResult) -> None:
        key = self.candidate_key(gwr)
        osm, distance = self.select_match(gwr, key) if key is not None else (None, None)
        ancillary = gwr.is_ancillary()
        if osm is not None:
            self.check_candidates(gwr, key, result)
            osm.state = OSMState.MATCHED
            pair = MatchedPair(gwr=gwr, osm=osm, distance=distance)
            if ancillary:
                result.matching_ancillary.append(pair)
                gwr.state = GWRState.MATCHED_ANCILLARY
            else:
                result.matching.append(pair)
                gwr.state = GWRState.MATCHED
            self.gwr_addresses.remove_item(gwr_key, gwr)
            return
        # without a trustworthy official flag a missing flag can't be used to suppress the address
        if not ancillary and (gwr.official or not self.validated):
            result.missing.append(gwr)
            gwr.state = GWRState.MISSING
        else:
            gwr.state = GWRState.UNMATCHED

    def collect_leftovers(self, result: MatchResult) -> None:
        """OSM addresses never compared with a GWR address are either missing a street or not in the GWR."""
        for leftover in self.osm_addresses.values():
            warning = AddressWarning.for_address(leftover)
            if leftover.street is None and leftover.place is None:
                warning.no_street = True
                leftover.state = OSMState.NO_STREET
                result.no_street += 1
            else:
                warning.non_gwr = True
                leftover.state = OSMState.NON_GWR
                result.non_gwr += 1
            result.warnings.append(warning)

    def match(self) -> MatchResult:
        result = MatchResult()
        result.duplicates = self.remove_duplicates(self.gwr_addresses)
        for gwr_key in self.gwr_addresses.keys():
            for gwr in self.gwr_addresses.get_list(gwr_key):
                self.match_address(gwr_key, gwr, result)
        self.collect_leftovers(result)
        return result
