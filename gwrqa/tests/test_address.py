import numpy as np
import pytest

from gwrqa.services.address import Address, AddressBase, AddressWarning, haversine_distance, normalize_key


@pytest.mark.parametrize(
    "name, number, expected",
    [
        ("Hauptstrasse", "5", "hauptstrasse 5"),
        ("Rue du Marché", "12A", "rue du marché 12a"),
        (None, "5", " 5"),
        ("Dorfplatz", None, "dorfplatz "),
        (None, None, " "),
    ],
)
def test_normalize_key(name, number, expected):
    assert normalize_key(name, number) == expected


def test_normalize_key_case_insensitive():
    assert normalize_key("HAUPTSTRASSE", "5A") == normalize_key("hauptstrasse", "5a")
    assert normalize_key("Hauptstrasse", "5") != normalize_key("Hauptstrasse", "7")


def test_haversine_same_point():
    assert haversine_distance(0, 0, 0, 0) == 0


def test_haversine_50_meters():
    assert haversine_distance(0, 0, 0, 0.00045) == pytest.approx(50, abs=0.1)


def test_haversine_symmetric():
    d1 = haversine_distance(8.5, 47.4, 8.51, 47.41)
    d2 = haversine_distance(8.51, 47.41, 8.5, 47.4)
    assert d1 == pytest.approx(d2)
    assert d1 > 0


@pytest.mark.parametrize(
    "housenumber, category, gwr_class, expected",
    [
        ("12.a", 0, 0, True),
        ("12,1", 0, 0, True),
        ("12a", 0, 0, False),
        ("12", 0, 0, False),
        (None, 1010, 0, True),
        ("5", 1080, 0, True),
        ("5", 0, 1242, True),
        ("5", 0, 1252, True),
        ("5", 1020, 1110, False),
    ],
)
def test_is_ancillary(housenumber, category, gwr_class, expected):
    address = Address(housenumber=housenumber, gwr_category=category, gwr_class=gwr_class)
    assert address.is_ancillary() is expected


def test_is_street_geom():
    assert Address(street_type="Street").is_street_geom()
    assert not Address(street_type="Place").is_street_geom()
    assert not Address().is_street_geom()


def test_lang_street():
    address = Address()
    address.set_lang_street("fr", "Rue de la Gare")
    assert address.street_fr == "Rue de la Gare"
    assert address.get_lang_street("fr") == "Rue de la Gare"
    assert address.get_lang_street("de") is None
    with pytest.raises(ValueError):
        address.set_lang_street("en", "Station Road")


def test_addresses_compared_by_identity():
    a = Address(street="Hauptstrasse", housenumber="5")
    b = Address(street="Hauptstrasse", housenumber="5")
    assert a != b
    assert len({a, b}) == 2


def test_distance_to():
    a = Address(lon=np.float32(0), lat=np.float32(0))
    b = Address(lon=np.float32(0), lat=np.float32(0.00045))
    assert a.distance_to(b) == pytest.approx(50, abs=0.1)


def test_warning_flags():
    warning = AddressWarning("point", "1", np.float32(0), np.float32(0))
    assert not warning.has_warning()
    warning.no_street = True
    assert warning.has_warning()


class TestAddressBase:

    @pytest.mark.parametrize("value", [None, float("nan"), np.nan, "", "   "])
    def test_clean_value_null(self, value):
        assert AddressBase.clean_value(value) is None

    def test_clean_value_text(self):
        assert AddressBase.clean_value("Hauptstrasse") == "Hauptstrasse"
        assert AddressBase.clean_value(8000) == "8000"

    def test_to_int(self):
        assert AddressBase.to_int("1010") == 1010
        assert AddressBase.to_int("1010.0") == 1010
        assert AddressBase.to_int(None) == 0
        assert AddressBase.to_int("abc") == 0

    @pytest.mark.parametrize(
        "value, expected",
        [(True, True), (np.bool_(False), False), ("true", True), ("1", True), ("f", False), (None, False)],
    )
    def test_to_bool(self, value, expected):
        assert AddressBase.to_bool(value) is expected

    def test_to_coordinate(self):
        assert AddressBase.to_coordinate("8.5", "lon") == np.float32(8.5)
        with pytest.raises(ValueError):
            AddressBase.to_coordinate(None, "lon")
        with pytest.raises(ValueError):
            AddressBase.to_coordinate("east", "lon")

    def test_to_id(self):
        assert AddressBase.to_id("123", "egaid") == "123"
        assert AddressBase.to_id(123.0, "egaid") == "123"
        assert AddressBase.to_id("-5.0", "osm_id") == "-5"
        with pytest.raises(ValueError):
            AddressBase.to_id(None, "egaid")
