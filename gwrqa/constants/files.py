class Dirs:
    RAW: str = "raw"
    OUTPUT: str = "output"
    MISSING: str = "missing"
    WARNINGS: str = "warnings"
    MATCHED: str = "matched"
    SUMMARY_STATS: str = "summary_stats"
    VALIDATION_ERRORS: str = "validation_errors"


class Raw:
    GWR_ADDRESSES: str = "gwr_addresses"
    OSM_POLYGONS: str = "osm_polygons"
    OSM_POINTS: str = "osm_points"


class SummaryStats:
    MUNICIPALITIES: str = "municipalities"
    CANTONS: str = "cantons"
    TOTAL: str = "total"
