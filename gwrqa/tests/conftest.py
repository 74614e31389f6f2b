from typing import Any, Callable

import numpy as np
import pytest

from gwrqa.services.address import Address
from gwrqa.types.base import GWRState, OSMState


# -------------------------------
# FIXTURES: raw rows and addresses
# -------------------------------
@pytest.fixture
def gwr_row() -> Callable[..., dict[str, Any]]:
    """Factory for raw GWR rows, defaults describe one official address in Zürich."""
    def make(**overrides) -> dict[str, Any]:
        row = {
            "egid": "100",
            "egaid": "1",
            "esid": "10",
            "gdekt": "ZH",
            "gdenr": "261",
            "gdename": "Zürich",
            "strname": "Hauptstrasse",
            "deinr": "5",
            "plz4": "8000",
            "plzz": "00",
            "plzname": "Zürich",
            "strsp": "9901",
            "strtype": "Street",
            "gkat": "1020",
            "gklas": "1110",
            "doffadr": True,
            "lon": "8.5",
            "lat": "47.4",
        }
        row.update(overrides)
        return row
    return make


@pytest.fixture
def osm_row() -> Callable[..., dict[str, Any]]:
    def make(**overrides) -> dict[str, Any]:
        row = {
            "osm_id": "1000",
            "muni_ref": "261",
            "housenumber": "5",
            "housename": None,
            "street": "Hauptstrasse",
            "place": None,
            "postcode": "8000",
            "city": "Zürich",
            "full": None,
            "lon": "8.5",
            "lat": "47.4",
        }
        row.update(overrides)
        return row
    return make


@pytest.fixture
def gwr_address() -> Callable[..., Address]:
    def make(**overrides) -> Address:
        values = {
            "external_id": "1",
            "housenumber": "5",
            "street": "Hauptstrasse",
            "street_type": "Street",
            "postcode": "8000",
            "city": "Zürich",
            "official": True,
            "lon": np.float32(0),
            "lat": np.float32(0),
            "state": GWRState.UNPROCESSED,
        }
        values.update(overrides)
        return Address(**values)
    return make


@pytest.fixture
def osm_address() -> Callable[..., Address]:
    def make(**overrides) -> Address:
        values = {
            "external_id": "1000",
            "osm_geom": "polygon",
            "housenumber": "5",
            "street": "Hauptstrasse",
            "postcode": "8000",
            "city": "Zürich",
            "lon": np.float32(0),
            "lat": np.float32(0),
            "state": OSMState.UNPROCESSED,
        }
        values.update(overrides)
        return Address(**values)
    return make
