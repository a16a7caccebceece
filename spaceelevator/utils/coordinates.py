"""Coordinate transformation utilities using Astropy.

Design Philosophy:
- Use trusted libraries (Astropy) for ellipsoid geometry, Earth rotation and
  the solar ephemeris
- Avoid custom coordinate transformation code
- Positions are plain numpy arrays in km so the shadow geometry can stay
  in linear algebra

Coordinate Frames:
- Geodetic: lat/lon/height on the WGS84 ellipsoid (angles in radians here)
- ITRS: Earth-Centered Earth-Fixed, used to recover geodetic heights
- GCRS: Earth-Centered Inertial, the frame all shadow geometry is done in
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from numbers import Real

import numpy as np
from numpy.typing import NDArray
from astropy import units as u
from astropy.constants import R_sun
from astropy.coordinates import (
    AltAz,
    CartesianRepresentation,
    EarthLocation,
    GCRS,
    ITRS,
    SkyCoord,
    get_body,
)
from astropy.time import Time
from astropy.utils.iers import conf as iers_conf

from spaceelevator.config import get_config

_astro_cfg = get_config().astronomy
iers_conf.auto_download = _astro_cfg.iers_auto_download
iers_conf.iers_degraded_accuracy = _astro_cfg.iers_degraded_accuracy


# Constants
EARTH_RADIUS_KM = 6371.0
SUN_DIAMETER_KM = 2.0 * R_sun.to_value(u.km)


@dataclass(frozen=True)
class SunEphemeris:
    """Sun position and size at an instant."""
    position_eci: NDArray[np.float64]  # GCRS position [km]
    diameter_km: float  # Physical diameter [km]

    @property
    def distance_km(self) -> float:
        return float(np.linalg.norm(self.position_eci))


def to_time(instant) -> Time:
    """Convert an absolute instant to an Astropy Time.

    Args:
        instant: Astropy Time, datetime (naive values are taken as UTC),
            ISO string, or seconds since the Unix epoch (UTC)

    Returns:
        Astropy Time in the UTC scale

    Raises:
        ValueError: If the instant cannot be interpreted as a time
    """
    if isinstance(instant, Time):
        return instant
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return Time(instant, scale="utc")
    if isinstance(instant, Real) and not isinstance(instant, bool):
        return Time(float(instant), format="unix", scale="utc")
    if isinstance(instant, str):
        return Time(instant, scale="utc")
    raise ValueError(f"Cannot interpret {instant!r} as a time")


def geodetic_location(lat_rad: float, lon_rad: float, height_km: float) -> EarthLocation:
    """Build a WGS84 EarthLocation from geodetic coordinates.

    Args:
        lat_rad: Latitude in radians (-pi/2 to pi/2)
        lon_rad: Longitude in radians
        height_km: Height above the WGS84 ellipsoid in km

    Returns:
        EarthLocation on the WGS84 ellipsoid
    """
    return EarthLocation.from_geodetic(
        lon=lon_rad * u.rad,
        lat=lat_rad * u.rad,
        height=height_km * u.km,
        ellipsoid="WGS84",
    )


def geodetic_to_inertial(
    lat_rad: float,
    lon_rad: float,
    height_km: float,
    instant,
) -> NDArray[np.float64]:
    """Convert geodetic coordinates to an inertial (GCRS) position.

    Earth rotation, precession and nutation at ``instant`` are applied by
    Astropy.

    Args:
        lat_rad: Latitude in radians (-pi/2 to pi/2)
        lon_rad: Longitude in radians
        height_km: Height above the WGS84 ellipsoid in km (not clamped)
        instant: Absolute time (see ``to_time``)

    Returns:
        [x, y, z] position in GCRS, in km
    """
    location = geodetic_location(lat_rad, lon_rad, height_km)
    position, _ = location.get_gcrs_posvel(to_time(instant))
    return np.asarray(position.xyz.to_value(u.km), dtype=np.float64)


def inertial_to_geodetic(
    position_eci: NDArray[np.float64],
    instant,
) -> tuple[float, float, float]:
    """Convert an inertial (GCRS) position back to geodetic coordinates.

    Args:
        position_eci: [x, y, z] position in GCRS, in km
        instant: Absolute time (see ``to_time``)

    Returns:
        (latitude, longitude, height) in (rad, rad, km)
    """
    time = to_time(instant)
    x, y, z = position_eci
    gcrs = GCRS(CartesianRepresentation(x, y, z, unit=u.km), obstime=time)
    itrs = gcrs.transform_to(ITRS(obstime=time))

    lon, lat, height = itrs.earth_location.to_geodetic("WGS84")
    return (
        float(lat.to_value(u.rad)),
        float(lon.to_value(u.rad)),
        float(height.to_value(u.km)),
    )


def sun_position(instant) -> SunEphemeris:
    """Get the Sun position in the inertial frame.

    Args:
        instant: Absolute time (see ``to_time``)

    Returns:
        SunEphemeris with the geocentric GCRS position [km] and the Sun's diameter
    """
    sun = get_body("sun", to_time(instant))
    position = np.asarray(sun.cartesian.xyz.to_value(u.km), dtype=np.float64)
    return SunEphemeris(position_eci=position, diameter_km=SUN_DIAMETER_KM)


def azimuth_elevation(
    lat_rad: float,
    lon_rad: float,
    height_km: float,
    target_eci: NDArray[np.float64],
    instant,
    upper_limb_radius_km: float = 0.0,
) -> tuple[float, float, float]:
    """Calculate azimuth and elevation of an inertial point seen from the ground.

    No atmospheric refraction is applied.

    Args:
        lat_rad: Observer latitude in radians
        lon_rad: Observer longitude in radians
        height_km: Observer height above the WGS84 ellipsoid in km
        target_eci: Target position in GCRS, in km
        instant: Absolute time (see ``to_time``)
        upper_limb_radius_km: Radius of the target body. If non-zero the
            elevation of the body's upper limb is returned.

    Returns:
        (azimuth, elevation, range) in (rad, rad, km). Elevation is negative
        below the horizon.
    """
    time = to_time(instant)
    observer = geodetic_location(lat_rad, lon_rad, height_km)
    x, y, z = target_eci
    target = SkyCoord(
        CartesianRepresentation(x, y, z, unit=u.km),
        frame=GCRS(obstime=time),
    )
    altaz = target.transform_to(AltAz(obstime=time, location=observer))

    range_km = float(altaz.distance.to_value(u.km))
    elevation = float(altaz.alt.to_value(u.rad))
    if upper_limb_radius_km > 0.0:
        elevation += float(np.arcsin(min(upper_limb_radius_km / range_km, 1.0)))

    return float(altaz.az.to_value(u.rad)), elevation, range_km


def dip_angle(position_eci: NDArray[np.float64], instant) -> float:
    """Calculate the dip of the horizon seen from an inertial point.

    Args:
        position_eci: Point position in GCRS, in km
        instant: Absolute time (see ``to_time``)

    Returns:
        Dip angle in radians. Negative above the ellipsoid surface,
        positive below it.
    """
    _, _, height = inertial_to_geodetic(position_eci, instant)
    rho = float(np.linalg.norm(position_eci))

    if height >= 0:
        return -float(np.arccos((rho - height) / rho))
    return float(np.arccos(rho / (rho - height)))
