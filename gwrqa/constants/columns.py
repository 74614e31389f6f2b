class GWRAddresses:
    # raw data columns, as exported from the gwr_addresses table
    EGID: str = "egid"
    EGAID: str = "egaid"  # repeated once per language for multilingual street names
    ESID: str = "esid"
    GDEKT: str = "gdekt"
    GDENR: str = "gdenr"
    GDENAME: str = "gdename"
    STRNAME: str = "strname"
    DEINR: str = "deinr"
    PLZ4: str = "plz4"
    PLZZ: str = "plzz"
    PLZNAME: str = "plzname"
    STRSP: str = "strsp"
    STRTYPE: str = "strtype"
    GKAT: str = "gkat"
    GKLAS: str = "gklas"
    DOFFADR: str = "doffadr"
    LON: str = "lon"
    LAT: str = "lat"


class OSMAddresses:
    OSM_ID: str = "osm_id"
    MUNI_REF: str = "muni_ref"
    HOUSENUMBER: str = "housenumber"
    HOUSENAME: str = "housename"
    STREET: str = "street"
    STREET_DE: str = "street_de"
    STREET_FR: str = "street_fr"
    STREET_IT: str = "street_it"
    STREET_RM: str = "street_rm"
    PLACE: str = "place"
    PLACE_DE: str = "place_de"
    PLACE_FR: str = "place_fr"
    PLACE_IT: str = "place_it"
    PLACE_RM: str = "place_rm"
    POSTCODE: str = "postcode"
    CITY: str = "city"
    FULL: str = "full"
    LON: str = "lon"
    LAT: str = "lat"


class StatsColumns:
    NAME: str = "name"
    MUNI_REF: str = "muni_ref"
    CANTON: str = "canton"
    GWR: str = "gwr"
    GWR_ANCILLARY: str = "gwr_ancillary"
    GWR_DUPLICATES: str = "gwr_duplicates"
    GWR_NO_NUMBER: str = "gwr_no_number"
    OSM_TOTAL: str = "osm_total"
    OSM_BUILDINGS: str = "osm_buildings"
    OSM_NODES: str = "osm_nodes"
    MATCHING: str = "matching"
    MATCHING_PCT: str = "matching_pct"
    MATCHING_ANCILLARY: str = "matching_ancillary"
    MISSING: str = "missing"
    POSTCODE: str = "postcode"
    CITY: str = "city"
    DISTANCE: str = "distance"
    PLACE: str = "place"
    NO_STREET: str = "no_street"
    NOT_OFFICIAL: str = "not_official"
    NON_GWR: str = "non_gwr"
    WARNINGS: str = "warnings"
    DENSITY: str = "density"
