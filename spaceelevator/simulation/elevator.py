"""Space elevator model.

An elevator is a rigid vertical structure fixed to the Earth's surface. Its
geometry (latitude, longitude, height) never changes; everything that depends
on time lives in an ElevatorState snapshot that is rebuilt as a whole.
"""

import logging
from typing import Optional

import numpy as np
from astropy.time import Time

from spaceelevator.config import Config, get_config
from spaceelevator.shadow.umbra import ShadowHeights, compute_shadow_heights
from spaceelevator.simulation.state import ElevatorState


logger = logging.getLogger(__name__)


class Elevator:
    """Space elevator at a fixed site.

    Attributes:
        latitude: Geodetic latitude (rad)
        longitude: Geodetic longitude (rad)
        height: Height of the structure above the base (km)
    """

    def __init__(
        self,
        latitude_deg: float,
        longitude_deg: float,
        height_km: float,
        instant,
        config: Optional[Config] = None,
    ):
        """Initialize elevator.

        Args:
            latitude_deg: Latitude of the base in degrees (-90 to 90)
            longitude_deg: Longitude of the base in degrees
            height_km: Height of the structure in km
            instant: Initial time (Astropy Time, datetime, ISO string or
                seconds since the Unix epoch, UTC)
            config: Configuration object (uses global config if None)

        Raises:
            ValueError: If height_km is negative
        """
        if height_km < 0:
            raise ValueError(f"Elevator height must be non-negative, got {height_km}")

        self._latitude = float(np.deg2rad(latitude_deg))
        self._longitude = float(np.deg2rad(longitude_deg))
        self._height = float(height_km)
        self._config = config

        self._state = self.at(instant)

    @classmethod
    def from_config(cls, instant, config: Optional[Config] = None) -> "Elevator":
        """Create an elevator at the configured default site."""
        if config is None:
            config = get_config()
        site = config.site
        return cls(site.latitude_deg, site.longitude_deg, site.height_km, instant, config=config)

    @property
    def latitude(self) -> float:
        return self._latitude

    @property
    def longitude(self) -> float:
        return self._longitude

    @property
    def latitude_deg(self) -> float:
        return float(np.rad2deg(self._latitude))

    @property
    def longitude_deg(self) -> float:
        return float(np.rad2deg(self._longitude))

    @property
    def height(self) -> float:
        return self._height

    @property
    def state(self) -> ElevatorState:
        """Current time-dependent snapshot."""
        return self._state

    @property
    def time(self) -> Time:
        """Instant associated with the model."""
        return self._state.time

    def at(self, instant) -> ElevatorState:
        """Build a snapshot for ``instant`` without changing the elevator."""
        return ElevatorState.build(self._latitude, self._longitude, self._height, instant)

    def set_time(self, instant=None) -> Time:
        """Get or update the time associated with the model.

        Args:
            instant: New time. If None, the current time is returned unchanged.

        Returns:
            The current instant after the update
        """
        if instant is not None:
            self._state = self.at(instant)
            logger.debug("Elevator state rebuilt for %s", self._state.time.isot)

        return self._state.time

    def shadow_heights(self) -> ShadowHeights:
        """Heights (km) at which the elevator leaves the umbra and penumbra."""
        return compute_shadow_heights(self._state, self._config)

    def __repr__(self) -> str:
        return (
            f"Elevator(latitude_deg={self.latitude_deg:g}, "
            f"longitude_deg={self.longitude_deg:g}, height_km={self._height:g}, "
            f"time={self._state.time.isot})"
        )
