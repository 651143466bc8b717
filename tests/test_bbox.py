import numpy as np

from osmpoints.bbox import BoundingBox


def test_new_box_holds_infinity_sentinels():
    bbox = BoundingBox()

    assert bbox.is_empty
    assert bbox.min_lon == np.inf and bbox.min_lat == np.inf
    assert bbox.max_lon == -np.inf and bbox.max_lat == -np.inf
    assert not bbox.contains(0.0, 0.0)


def test_first_point_sets_all_bounds():
    bbox = BoundingBox()
    bbox.update(np.float32(15.0), np.float32(5.0))

    assert not bbox.is_empty
    assert bbox.as_dict() == {'min_lon': 15.0, 'max_lon': 15.0, 'min_lat': 5.0, 'max_lat': 5.0}
    assert bbox.contains(15.0, 5.0)


def test_positive_coordinates_do_not_include_origin():
    bbox = BoundingBox()
    for lon, lat in [(15.0, 5.0), (30.0, 15.0), (20.0, 10.0)]:
        bbox.update(lon, lat)

    assert bbox.as_dict() == {'min_lon': 15.0, 'max_lon': 30.0, 'min_lat': 5.0, 'max_lat': 15.0}
    assert not bbox.contains(0.0, 0.0)


def test_axes_are_updated_independently():
    bbox = BoundingBox()
    bbox.update(-10.0, 50.0)
    bbox.update(10.0, -50.0)

    assert bbox.min_lon == -10.0 and bbox.max_lon == 10.0
    assert bbox.min_lat == -50.0 and bbox.max_lat == 50.0
    assert bbox.contains(0.0, 0.0)
    assert not bbox.contains(10.5, 0.0)


def test_bounds_are_float32():
    bbox = BoundingBox()
    bbox.update(0.1, 0.2)

    assert all(isinstance(value, np.float32) for value in bbox.as_dict().values())
    assert bbox.min_lon == np.float32(0.1)
    assert "min_lon=0.1," in repr(bbox)


def test_repr_uses_shortest_float32_form():
    bbox = BoundingBox()
    bbox.update(-0.12, 51.5)

    assert repr(bbox) == "BoundingBox(min_lon=-0.12, max_lon=-0.12, min_lat=51.5, max_lat=51.5)"
