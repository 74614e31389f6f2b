import json
from pathlib import Path

import numpy as np
import pytest

from gwrqa.services.address import AddressWarning
from gwrqa.services.export import GeoJsonExporter
from gwrqa.services.match import MatchedPair


def test_missing_street(gwr_address):
    address = gwr_address(lon=np.float32(8.5), lat=np.float32(47.25))
    feature = GeoJsonExporter.to_feature(address)
    assert feature["type"] == "Feature"
    assert feature["geometry"] == {"type": "Point", "coordinates": [8.5, 47.25]}
    assert feature["properties"] == {
        "addr:housenumber": "5",
        "addr:street": "Hauptstrasse",
        "addr:postcode": "8000",
        "addr:city": "Zürich",
    }


def test_missing_place_multilingual(gwr_address):
    address = gwr_address(street=None, street_type="Place", street_de="Oberdorf", street_fr="Haut du Village")
    properties = GeoJsonExporter.to_feature(address)["properties"]
    assert properties["addr:place"] == ""
    assert properties["addr:place:de"] == "Oberdorf"
    assert properties["addr:place:fr"] == "Haut du Village"
    assert "addr:street" not in properties
    assert "addr:place:it" not in properties


def test_warning_only_set_flags():
    warning = AddressWarning("polygon", "1000", np.float32(0), np.float32(0))
    warning.postcode = True
    warning.osm_postcode = "8001"
    warning.gwr_postcode = "8000"
    properties = GeoJsonExporter.to_feature(warning)["properties"]
    assert properties == {
        "OSM geometry": "polygon",
        "OSM id": "1000",
        "missing or wrong addr:postcode": True,
        "OSM postcode": "8001",
        "GWR postcode": "8000",
    }


def test_matched_pair(gwr_address, osm_address):
    pair = MatchedPair(gwr=gwr_address(), osm=osm_address(), distance=12.345)
    properties = GeoJsonExporter.to_feature(pair)["properties"]
    assert properties["GWR id"] == "1"
    assert properties["OSM id"] == "1000"
    assert properties["distance"] == 12.3


def test_unknown_item():
    with pytest.raises(TypeError):
        GeoJsonExporter.to_feature("Hauptstrasse 5")


def test_write(tmp_path: Path, gwr_address):
    path = tmp_path / "missing" / "261.geojson"
    GeoJsonExporter.write([gwr_address(), gwr_address(external_id="2")], path)
    with open(path, encoding="utf-8") as f:
        collection = json.load(f)
    assert collection["type"] == "FeatureCollection"
    assert len(collection["features"]) == 2
    assert collection["features"][0]["properties"]["addr:city"] == "Zürich"


def test_write_empty(tmp_path: Path):
    path = tmp_path / "warnings.geojson"
    GeoJsonExporter.write([], path)
    with open(path, encoding="utf-8") as f:
        assert json.load(f) == {"type": "FeatureCollection", "features": []}
