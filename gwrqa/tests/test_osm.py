import pandas as pd
import pytest

from gwrqa.services.address import Address
from gwrqa.services.multi_index import MultiIndex
from gwrqa.services.osm import OSMIndexBuilder
from gwrqa.types.base import OSMState


@pytest.fixture
def gwr_index() -> MultiIndex[str, Address]:
    index: MultiIndex[str, Address] = MultiIndex()
    index.add("rue de la gare 5", Address(street_fr="Rue de la Gare", housenumber="5"))
    return index


@pytest.mark.parametrize(
    "housenumber, expected",
    [
        ("5", ["5"]),
        ("5;7", ["5", "7"]),
        ("12 A, 14", ["12A", "14"]),
        ("5;", ["5", ""]),
    ],
)
def test_split_housenumbers(housenumber, expected):
    assert OSMIndexBuilder.split_housenumbers(housenumber) == expected


def test_fan_out(osm_row):
    builder = OSMIndexBuilder(MultiIndex())
    count = builder.add_rows([osm_row(housenumber="5; 7")], "polygon")
    assert count == 1
    assert builder.addresses.size == 2
    five = builder.addresses.get_list("hauptstrasse 5")[0]
    seven = builder.addresses.get_list("hauptstrasse 7")[0]
    assert five is not seven
    assert five.external_id == seven.external_id == "1000"
    assert five.osm_geom == "polygon"
    assert five.state == OSMState.UNPROCESSED


def test_empty_split_numbers_dropped(osm_row):
    builder = OSMIndexBuilder(MultiIndex())
    builder.add_row(osm_row(housenumber="5;"), "point")
    assert builder.addresses.keys() == ["hauptstrasse 5"]


def test_housename_key(osm_row):
    builder = OSMIndexBuilder(MultiIndex())
    added = builder.add_row(osm_row(housenumber=None, housename="Villa Rosa"), "polygon")
    assert len(added) == 1
    assert added[0].housenumber is None
    assert builder.addresses.contains_key("hauptstrasse villa rosa")


def test_place_key(osm_row):
    builder = OSMIndexBuilder(MultiIndex())
    builder.add_row(osm_row(street=None, place="Oberdorf"), "polygon")
    assert builder.addresses.contains_key("oberdorf 5")


def test_language_variant_resolved(gwr_index, osm_row):
    builder = OSMIndexBuilder(gwr_index)
    address = builder.add_row(
        osm_row(street="Bahnhofstrasse", street_de="Bahnhofstrasse", street_fr="Rue de la Gare"),
        "polygon",
    )[0]
    assert address.street == "Rue de la Gare"
    assert address.street_lang == "fr"
    assert builder.addresses.contains_key("rue de la gare 5")


def test_language_variant_unresolved(gwr_index, osm_row):
    builder = OSMIndexBuilder(gwr_index)
    address = builder.add_row(osm_row(street="Bahnhofstrasse", street_it="Via della Stazione"), "point")[0]
    assert address.street == "Bahnhofstrasse"
    assert address.street_lang is None
    assert builder.addresses.contains_key("bahnhofstrasse 5")


def test_place_variant_resolved(osm_row):
    gwr_addresses: MultiIndex[str, Address] = MultiIndex()
    gwr_addresses.add("sur l'eglise 5", Address())
    builder = OSMIndexBuilder(gwr_addresses)
    address = builder.add_row(osm_row(street=None, place="Kirchweg", place_fr="Sur l'Eglise"), "point")[0]
    assert address.place == "Sur l'Eglise"
    assert address.street_lang == "fr"


def test_add_df(osm_row):
    builder = OSMIndexBuilder(MultiIndex())
    df = pd.DataFrame([osm_row(), osm_row(osm_id="1001", housenumber="9;11")])
    assert builder.add_df(df, "point") == 2
    assert builder.addresses.size == 3
