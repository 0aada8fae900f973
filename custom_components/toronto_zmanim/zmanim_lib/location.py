# custom_components/toronto_zmanim/zmanim_lib/location.py
"""The fixed location every zman is computed for."""

from __future__ import annotations

from dataclasses import dataclass
from zoneinfo import ZoneInfo

from zmanim.util.geo_location import GeoLocation


@dataclass(frozen=True)
class Location:
    """Immutable place description (coordinates are signed degrees)."""

    latitude: float
    longitude: float
    tzname: str
    name: str
    country_code: str
    in_israel: bool = False
    elevation: float = 0.0

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.tzname)

    @property
    def diaspora(self) -> bool:
        return not self.in_israel

    def geo_location(self) -> GeoLocation:
        return GeoLocation(
            name=self.name,
            latitude=self.latitude,
            longitude=self.longitude,
            time_zone=self.tzname,
            elevation=self.elevation,
        )


TORONTO = Location(
    latitude=43.6629,
    longitude=-79.3957,
    tzname="America/Toronto",
    name="Toronto, ON",
    country_code="CA",
    in_israel=False,
)
