from typing import Any
from typing import Dict


# https://cloud.google.com/datastore/docs/reference/data/rest/Shared.Types/LatLng
class LatLng:
    """A geographical point, stored as a `geoPointValue`."""

    __slots__ = ('_lat', '_lon')

    def __init__(self, lat: float, lon: float) -> None:
        if not -90.0 <= lat <= 90.0:
            raise ValueError(f'latitude {lat} is outside [-90, 90]')
        if not -180.0 <= lon <= 180.0:
            raise ValueError(f'longitude {lon} is outside [-180, 180]')

        self._lat = float(lat)
        self._lon = float(lon)

    @property
    def lat(self) -> float:
        return self._lat

    @property
    def lon(self) -> float:
        return self._lon

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, LatLng):
            return False

        return self.lat == other.lat and self.lon == other.lon

    def __hash__(self) -> int:
        return hash((self._lat, self._lon))

    def __repr__(self) -> str:
        return str(self.to_repr())

    def __str__(self) -> str:
        return f'({self.lat},{self.lon})'

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'LatLng':
        # proto3 omits zero-valued fields
        return cls(lat=data.get('latitude', 0.0),
                   lon=data.get('longitude', 0.0))

    def to_repr(self) -> Dict[str, float]:
        return {
            'latitude': self.lat,
            'longitude': self.lon,
        }
