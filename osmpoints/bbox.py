import numpy as np


class BoundingBox:
    """Running min/max of longitude and latitude in 32-bit floats.

    Before the first update the minimums are +inf and the maximums -inf, so the first point always
    replaces all four values. Such an empty box is reported with ``is_empty``.
    """

    FIELDS = ('min_lon', 'max_lon', 'min_lat', 'max_lat')

    def __init__(self):
        self.min_lon = np.float32(np.inf)
        self.max_lon = np.float32(-np.inf)
        self.min_lat = np.float32(np.inf)
        self.max_lat = np.float32(-np.inf)

    @property
    def is_empty(self) -> bool:
        return bool(self.min_lon > self.max_lon)

    def update(self, lon: np.float32, lat: np.float32):
        lon, lat = np.float32(lon), np.float32(lat)
        self.max_lon = max(lon, self.max_lon)
        self.min_lon = min(lon, self.min_lon)
        self.max_lat = max(lat, self.max_lat)
        self.min_lat = min(lat, self.min_lat)

    def contains(self, lon, lat) -> bool:
        return bool(self.min_lon <= lon <= self.max_lon and self.min_lat <= lat <= self.max_lat)

    def as_dict(self) -> dict:
        return {field: getattr(self, field) for field in self.FIELDS}

    def __repr__(self):
        values = ", ".join(f"{field}={getattr(self, field)!s}" for field in self.FIELDS)
        return f"BoundingBox({values})"
