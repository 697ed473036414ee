import math

import numpy as np
import pandas as pd
import pytest

from geodist.core.errors import InvalidInputError, InvalidValueError, ShapeMismatchError
from geodist.core.geo import (
    EARTH_RADIUS,
    GeoPoint,
    central_angle,
    distance,
    distance_batch,
    distance_scalar,
    haversine,
    radius_for,
)

BROOKLYN = (40.671, -73.985)
LIBERTY = (40.6892, -74.0445)

POINTS = [
    (40.671, -73.985),
    (40.6892, -74.0445),
    (51.5074, -0.1278),
    (-33.8688, 151.2093),
    (35.6762, 139.6503),
    (0.0, 0.0),
    (89.9, 179.9),
    (-89.9, -179.9),
]


def test_distance_to_self_is_zero():
    for lat, lon in POINTS:
        assert distance(lat, lon, lat, lon) == 0.0
    lats = np.array([p[0] for p in POINTS])
    lons = np.array([p[1] for p in POINTS])
    for lat, lon in POINTS[:3]:
        out = distance(lat, lon, np.array([lat]), np.array([lon]))
        assert out.tolist() == [0.0]
    assert distance_batch(0.0, 0.0, lats, lons).shape == (len(POINTS),)


def test_distance_is_symmetric():
    for lat1, lon1 in POINTS:
        for lat2, lon2 in POINTS:
            assert distance(lat1, lon1, lat2, lon2) == pytest.approx(distance(lat2, lon2, lat1, lon1), rel=1e-12)


def test_scalar_and_batch_forms_agree():
    lats = [p[0] for p in POINTS]
    lons = [p[1] for p in POINTS]
    batch = distance(*BROOKLYN, lats, lons)
    one_by_one = [distance(*BROOKLYN, lat, lon) for lat, lon in zip(lats, lons)]

    assert isinstance(batch, np.ndarray)
    assert len(batch) == len(one_by_one)
    for b, s in zip(batch, one_by_one):
        assert b == pytest.approx(s, rel=1e-9, abs=1e-12)


def test_kilometers_scale_from_miles():
    for lat, lon in POINTS:
        miles = distance(*BROOKLYN, lat, lon, unit="miles")
        km = distance(*BROOKLYN, lat, lon, unit="kilometers")
        assert km == pytest.approx(miles * 6371 / 3959, rel=1e-9, abs=1e-12)


def test_known_value_brooklyn_to_statue_of_liberty():
    # Regression seed: reference point in Brooklyn to the Statue of Liberty.
    d = distance(*BROOKLYN, *LIBERTY)
    assert d == pytest.approx(3.36, abs=0.1)
    assert haversine(GeoPoint(*BROOKLYN), GeoPoint(*LIBERTY)) == d


def test_antipodal_points_give_half_circumference():
    radius = EARTH_RADIUS["miles"]
    assert distance(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * radius, rel=1e-12)
    assert distance(90.0, 0.0, -90.0, 0.0) == pytest.approx(math.pi * radius, rel=1e-12)


def test_distances_are_bounded_by_half_circumference():
    rng = np.random.default_rng(7)
    lats = rng.uniform(-90, 90, size=500)
    lons = rng.uniform(-180, 180, size=500)
    for unit in ("miles", "kilometers"):
        out = distance(12.5, -45.0, lats, lons, unit=unit)
        assert np.all(out >= 0)
        assert np.all(out <= math.pi * radius_for(unit))

    # Near-antipodal pairs where rounding can push the haversine term past 1.
    near = distance_batch(33.3, 44.4, [-33.3, -33.3000000001], [-135.6, -135.6000000001])
    assert not np.any(np.isnan(near))
    assert np.all(near <= math.pi * EARTH_RADIUS["miles"])


def test_central_angle_clamps_haversine_term():
    assert central_angle(1.0 + 1e-15) == math.pi
    assert central_angle(-1e-18) == 0.0
    out = central_angle(np.array([0.0, 0.5, 1.0000000000000002]))
    assert not np.any(np.isnan(out))
    assert out[-1] == math.pi


def test_shape_mismatch_is_rejected():
    with pytest.raises(ShapeMismatchError, match=r"3 values .* 4"):
        distance(*BROOKLYN, [1.0, 2.0, 3.0], [1.0, 2.0, 3.0, 4.0])


def test_scalar_and_collection_targets_cannot_be_mixed():
    with pytest.raises(ShapeMismatchError, match="both be scalars or both be collections"):
        distance(*BROOKLYN, [40.0, 41.0], -74.0)
    with pytest.raises(ShapeMismatchError):
        distance_scalar(*BROOKLYN, [40.0], [-74.0])


def test_non_finite_values_are_rejected():
    with pytest.raises(InvalidValueError, match="target_lat"):
        distance(*BROOKLYN, float("nan"), -74.0)
    with pytest.raises(InvalidValueError, match="target_lon"):
        distance(*BROOKLYN, [40.0, 41.0], [-74.0, float("inf")])
    with pytest.raises(InvalidValueError, match="reference_lat"):
        distance(float("-inf"), -73.985, 40.0, -74.0)


def test_non_numeric_values_and_array_reference_are_rejected():
    with pytest.raises(InvalidValueError, match="numeric"):
        distance(*BROOKLYN, "north", -74.0)
    with pytest.raises(InvalidValueError, match="single values"):
        distance([40.0, 41.0], -73.985, 40.0, -74.0)


def test_out_of_range_passes_unless_strict():
    # Lenient mode evaluates the formula anyway.
    assert math.isfinite(distance(*BROOKLYN, 95.0, -74.0))
    with pytest.raises(InvalidValueError, match=r"target_lat is outside \[-90, 90\]"):
        distance(*BROOKLYN, 95.0, -74.0, strict=True)
    with pytest.raises(InvalidValueError, match=r"target_lon is outside \[-180, 180\]"):
        distance(*BROOKLYN, [40.0], [-181.0], strict=True)


def test_unknown_unit_is_rejected():
    with pytest.raises(InvalidInputError, match="Unknown distance unit 'furlongs'"):
        distance(*BROOKLYN, *LIBERTY, unit="furlongs")
    assert radius_for(" Kilometers ") == 6371.0


def test_series_targets_keep_their_index():
    lat = pd.Series([40.6892, 51.5074], index=["liberty", "london"])
    lon = pd.Series([-74.0445, -0.1278], index=["liberty", "london"])
    out = distance(*BROOKLYN, lat, lon)
    assert isinstance(out, pd.Series)
    assert list(out.index) == ["liberty", "london"]
    assert out["liberty"] == pytest.approx(distance(*BROOKLYN, *LIBERTY), rel=1e-9)


def test_empty_batch_returns_empty_array():
    out = distance(*BROOKLYN, [], [])
    assert isinstance(out, np.ndarray)
    assert out.shape == (0,)


def test_module_docstring_is_exposed():
    import geodist.core.geo as geo

    assert geo.__doc__.strip().startswith("Great-circle (haversine) distance.")
