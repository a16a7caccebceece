"""Time-dependent elevator snapshot."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from astropy.time import Time

from spaceelevator.utils.coordinates import (
    SunEphemeris,
    geodetic_to_inertial,
    sun_position,
    to_time,
)


@dataclass(frozen=True, eq=False)
class ElevatorState:
    """Elevator geometry frozen at one instant.

    Attributes:
        latitude: Geodetic latitude (rad)
        longitude: Geodetic longitude (rad)
        height: Structure height above the ellipsoid (km)
        time: Instant the snapshot was taken at
        base_eci: Inertial position of the base station (km)
        sun: Sun position and size at ``time``
    """

    latitude: float
    longitude: float
    height: float
    time: Time
    base_eci: NDArray[np.float64]
    sun: SunEphemeris

    @classmethod
    def build(cls, latitude: float, longitude: float, height: float, instant) -> "ElevatorState":
        """Compute base and sun positions together for one instant."""
        time = to_time(instant)
        return cls(
            latitude=latitude,
            longitude=longitude,
            height=height,
            time=time,
            base_eci=geodetic_to_inertial(latitude, longitude, 0.0, time),
            sun=sun_position(time),
        )

    def top_eci(self) -> NDArray[np.float64]:
        """Inertial position of the top of the structure (km)."""
        return geodetic_to_inertial(self.latitude, self.longitude, self.height, self.time)
