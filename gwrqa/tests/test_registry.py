import numpy as np
import pandas as pd
import pytest

from gwrqa.services.registry import RegistryLoader
from gwrqa.types.base import GWRState


def test_load_single_row(gwr_row):
    index = RegistryLoader().load([gwr_row()])
    assert index.count == 1
    assert index.addresses.size == 1
    assert index.canton == "ZH"
    assert index.muni_name == "Zürich"
    address = index.addresses.get_list("hauptstrasse 5")[0]
    assert address.external_id == "1"
    assert address.street == "Hauptstrasse"
    assert address.street_lang == "de"
    assert address.postcode == "8000"
    assert address.city == "Zürich"
    assert address.official is True
    assert address.lon == np.float32(8.5)
    assert address.state == GWRState.UNPROCESSED


def test_no_number_discarded(gwr_row):
    index = RegistryLoader().load([gwr_row(deinr=None)])
    assert index.no_number_count == 1
    assert index.count == 0
    assert index.addresses.size == 0


def test_multilingual_fold(gwr_row):
    rows = [
        gwr_row(egaid="7", strname="Bahnhofstrasse", strsp="9901"),
        gwr_row(egaid="7", strname="Rue de la Gare", strsp="9903"),
    ]
    index = RegistryLoader().load(rows)
    assert index.count == 1
    assert index.addresses.size == 1
    address = index.addresses.get_list("bahnhofstrasse 5")[0]
    assert address.street is None
    assert address.street_de == "Bahnhofstrasse"
    assert address.street_fr == "Rue de la Gare"


def test_fold_skips_unknown_language(gwr_row):
    rows = [
        gwr_row(egaid="7", strname="Bahnhofstrasse", strsp="9901"),
        gwr_row(egaid="7", strname="Station Road", strsp="1234"),
    ]
    address = RegistryLoader().load(rows).addresses.values()[0]
    assert address.street is None
    assert address.street_de == "Bahnhofstrasse"
    assert address.street_fr is None
    assert address.street_it is None
    assert address.street_rm is None


def test_ancillary_counted_and_indexed(gwr_row):
    index = RegistryLoader().load([gwr_row(gkat="1010"), gwr_row(egaid="2", deinr="7")])
    assert index.ancillary_count == 1
    assert index.count == 1
    assert index.addresses.size == 2


@pytest.mark.parametrize("limit, expected", [(0.8, True), (0.9, False)])
def test_validated(gwr_row, limit, expected):
    rows = [gwr_row(egaid=str(i), deinr=str(i)) for i in range(4)]
    rows.append(gwr_row(egaid="9", deinr="9", doffadr=False))
    index = RegistryLoader(official_valid_limit=limit).load(rows)
    assert index.official_fraction == pytest.approx(0.8)
    assert index.validated is expected


def test_empty_unit_not_validated():
    index = RegistryLoader().load([])
    assert index.official_fraction is None
    assert index.validated is False
    assert index.canton == "?"


@pytest.mark.parametrize("limit", [-0.1, 1.5])
def test_invalid_limit(limit):
    with pytest.raises(ValueError):
        RegistryLoader(official_valid_limit=limit)


def test_gwr_language():
    assert RegistryLoader.gwr_language("9901") == "de"
    assert RegistryLoader.gwr_language("9902") == "rm"
    assert RegistryLoader.gwr_language("9903.0") == "fr"
    assert RegistryLoader.gwr_language(9904) == "it"
    assert RegistryLoader.gwr_language(None) is None
    assert RegistryLoader.gwr_language("1") is None


def test_load_df(gwr_row):
    df = pd.DataFrame([gwr_row(plz4=np.nan), gwr_row(egaid="2", deinr=np.nan)])
    index = RegistryLoader().load_df(df)
    assert index.count == 1
    assert index.no_number_count == 1
    assert index.addresses.values()[0].postcode is None


def test_missing_coordinate_fails(gwr_row):
    with pytest.raises(ValueError):
        RegistryLoader().load([gwr_row(lat=None)])
