import math

import pytest

from tripmiles.exceptions import MalformedRecord, MissingField, WrongFieldType
from tripmiles.geometry import GeodeticPosition
from tripmiles.nvector import NVectorPosition


@pytest.mark.parametrize(
    "latitude, longitude, expected",
    [
        (0.0, 0.0, (1.0, 0.0, 0.0)),
        (0.0, 90.0, (0.0, 1.0, 0.0)),
        (90.0, 0.0, (0.0, 0.0, 1.0)),
        (-90.0, 0.0, (0.0, 0.0, -1.0)),
        (0.0, 180.0, (-1.0, 0.0, 0.0)),
    ],
)
def test_from_geodetic_axes(latitude, longitude, expected):
    nvector = NVectorPosition.from_geodetic(GeodeticPosition(latitude, longitude))
    assert nvector.x == pytest.approx(expected[0], abs=1e-15)
    assert nvector.y == pytest.approx(expected[1], abs=1e-15)
    assert nvector.z == pytest.approx(expected[2], abs=1e-15)


def test_from_geodetic_is_unit_length():
    nvector = NVectorPosition.from_geodetic(GeodeticPosition(47.6062, -122.3321))
    assert math.hypot(nvector.x, nvector.y, nvector.z) == pytest.approx(1.0)


def test_to_geodetic():
    position = NVectorPosition(x=0.5, y=0.5, z=math.sqrt(0.5)).to_geodetic()
    assert position.latitude == pytest.approx(45.0)
    assert position.longitude == pytest.approx(45.0)


def test_to_geodetic_ignores_scale():
    """Only the direction of the vector determines the position."""
    unit = NVectorPosition.from_geodetic(GeodeticPosition(-33.8688, 151.2093))
    scaled = NVectorPosition(x=unit.x * 57.3, y=unit.y * 57.3, z=unit.z * 57.3)
    assert scaled.latitude == pytest.approx(-33.8688)
    assert scaled.longitude == pytest.approx(151.2093)


def test_latitude_longitude_properties():
    nvector = NVectorPosition(x=0.0, y=-1.0, z=0.0)
    assert nvector.latitude == pytest.approx(0.0)
    assert nvector.longitude == pytest.approx(-90.0)


def test_round_trip_known_position():
    want = GeodeticPosition(latitude=64.1466, longitude=-21.9426)  # Reykjavik
    got = NVectorPosition.from_geodetic(want).to_geodetic()
    assert abs(got.latitude - want.latitude) <= 1e-8
    assert abs(got.longitude - want.longitude) <= 1e-8


class TestNVectorDecode:
    def test_decode(self):
        nvector = NVectorPosition.decode('{"X": 0.1, "Y": 0.2, "Z": 0.3}')
        assert nvector == NVectorPosition(0.1, 0.2, 0.3)

    def test_decode_integers(self):
        assert NVectorPosition.decode({"X": 1, "Y": 0, "Z": 0}) == NVectorPosition(1.0, 0.0, 0.0)

    def test_wrong_field_count(self):
        with pytest.raises(MalformedRecord):
            NVectorPosition.decode({"X": 1, "Y": 0})
        with pytest.raises(MalformedRecord):
            NVectorPosition.decode({"X": 1, "Y": 0, "Z": 0, "W": 0})

    def test_missing_field(self):
        with pytest.raises(MissingField) as exc_info:
            NVectorPosition.decode({"X": 1, "Y": 0, "z": 0})
        assert exc_info.value.field == "Z"

    def test_wrong_field_type(self):
        with pytest.raises(WrongFieldType) as exc_info:
            NVectorPosition.decode({"X": 1, "Y": "0", "Z": 0})
        assert exc_info.value.field == "Y"
