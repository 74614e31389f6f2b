import json
from pathlib import Path
from typing import Any, Iterable

from gwrqa.constants.base import LANG_DE, LANG_FR, LANG_IT, LANG_RM
from gwrqa.services.address import Address, AddressWarning
from gwrqa.services.match import MatchedPair
from gwrqa.types.base import GeoJsonFeature, GeoJsonFeatureCollection, GeoJsonGeometry

ExportItem = Address | AddressWarning | MatchedPair


class GeoJsonExporter:

    """
    Converts comparison results to GeoJSON. Missing GWR addresses are written with OSM tag names so that they can be
    loaded into an editor and copied over. Warnings only carry the flags that are set.
    """

    @classmethod
    def point(cls, lon: Any, lat: Any) -> GeoJsonGeometry:
        return {"type": "Point", "coordinates": [float(lon), float(lat)]}

    @classmethod
    def feature(cls, properties: dict[str, Any], lon: Any, lat: Any) -> GeoJsonFeature:
        return {"type": "Feature", "properties": properties, "geometry": cls.point(lon, lat)}

    @classmethod
    def missing_properties(cls, address: Address) -> dict[str, Any]:
        # GWR street names of type other than 'Street' are place names in OSM
        tag = "addr:street" if address.is_street_geom() else "addr:place"
        properties: dict[str, Any] = {
            "addr:housenumber": address.housenumber,
            tag: address.street or "",
        }
        for lang in (LANG_DE, LANG_FR, LANG_IT, LANG_RM):
            street = address.get_lang_street(lang)
            if street is not None:
                properties[f"{tag}:{lang}"] = street
        properties["addr:postcode"] = address.postcode
        properties["addr:city"] = address.city
        return properties

    @classmethod
    def warning_properties(cls, warning: AddressWarning) -> dict[str, Any]:
        properties: dict[str, Any] = {
            "OSM geometry": warning.osm_geom,
            "OSM id": warning.external_id,
        }
        if warning.postcode:
            properties["missing or wrong addr:postcode"] = True
            properties["OSM postcode"] = warning.osm_postcode
            properties["GWR postcode"] = warning.gwr_postcode
        if warning.city:
            properties["missing or wrong addr:city"] = True
            properties["OSM city"] = warning.osm_city
            properties["GWR city"] = warning.gwr_city
        if warning.place:
            properties["addr:street instead of addr:place"] = True
        if warning.distance:
            properties["distance more than 50 m"] = True
        if warning.no_street:
            properties["no addr:street or addr:place"] = True
        if warning.not_official:
            properties["not official"] = True
        if warning.non_gwr:
            properties["not in GWR"] = True
        return properties

    @classmethod
    def matched_properties(cls, pair: MatchedPair) -> dict[str, Any]:
        return {
            "GWR id": pair.gwr.external_id,
            "OSM geometry": pair.osm.osm_geom,
            "OSM id": pair.osm.external_id,
            "address": f"{pair.gwr.street or pair.gwr.street_de or ''} {pair.gwr.housenumber}".strip(),
            "distance": round(pair.distance, 1),
        }

    @classmethod
    def to_feature(cls, item: ExportItem) -> GeoJsonFeature:
        if isinstance(item, MatchedPair):
            # matched pairs are placed on the GWR coordinates
            return cls.feature(cls.matched_properties(item), item.gwr.lon, item.gwr.lat)
        if isinstance(item, AddressWarning):
            return cls.feature(cls.warning_properties(item), item.lon, item.lat)
        if isinstance(item, Address):
            return cls.feature(cls.missing_properties(item), item.lon, item.lat)
        raise TypeError(f"Cannot export {type(item).__name__} to GeoJSON")

    @classmethod
    def feature_collection(cls, items: Iterable[ExportItem]) -> GeoJsonFeatureCollection:
        return {"type": "FeatureCollection", "features": [cls.to_feature(item) for item in items]}

    @classmethod
    def write(cls, items: Iterable[ExportItem], path: Path) -> str:
        """Writes items as a FeatureCollection, creating the parent directory if needed. Returns the path written."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(cls.feature_collection(items), f, ensure_ascii=False, indent=1)
        return str(path)
