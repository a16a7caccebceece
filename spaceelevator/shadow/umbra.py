"""Earth shadow heights along a space elevator.

Uses a conical shadow model. The umbra is the cone tangent to the Earth with
its apex on the anti-solar side, where the shadow converges to zero width.
The penumbra is congruent to the umbra but reflected through the plane of
the terminator, so it opens away from the Sun with its apex on the sunward
side.
"""

import logging
from typing import NamedTuple, Optional

import numpy as np
from numpy.typing import NDArray

from spaceelevator.config import Config, get_config
from spaceelevator.geometry.cone import Cone, intersect_line_cone
from spaceelevator.geometry.vectors import clamp, normalize
from spaceelevator.simulation.state import ElevatorState
from spaceelevator.utils.coordinates import SunEphemeris, azimuth_elevation, dip_angle


logger = logging.getLogger(__name__)


class ShadowHeights(NamedTuple):
    """Heights above the base at which the elevator leaves each shadow (km)."""
    umbra_km: float
    penumbra_km: float


def build_umbra_cone(sun: SunEphemeris, instant, earth_radius_km: float) -> Cone:
    """Build the umbral cone for the current Sun position.

    By similar triangles the apex sits at R_earth / R_sun times the Sun's
    distance on the anti-solar side.

    Args:
        sun: Sun ephemeris at ``instant``
        instant: Absolute time, used for the apex's horizon dip
        earth_radius_km: Earth radius used for the cone [km]

    Returns:
        Umbra cone with its axis pointing toward the Sun
    """
    axis = normalize(sun.position_eci)
    vertex = -sun.position_eci * (earth_radius_km / (sun.diameter_km / 2))
    half_angle = np.pi / 2 + dip_angle(vertex, instant)
    return Cone(vertex, axis, half_angle)


def build_shadow_cones(
    sun: SunEphemeris,
    instant,
    earth_radius_km: float,
) -> tuple[Cone, Cone]:
    """Build (umbra, penumbra) cones."""
    umbra = build_umbra_cone(sun, instant, earth_radius_km)
    return umbra, umbra.reflected()


def exit_height(
    cone: Cone,
    origin: NDArray[np.float64],
    direction: NDArray[np.float64],
    height_km: float,
) -> float:
    """Height along the elevator at which it leaves a shadow cone.

    The far intersection is used. If the top of the elevator is still inside
    the cone the whole structure is shadowed.

    Args:
        cone: Shadow cone
        origin: Base station position (km)
        direction: Unit direction of the elevator
        height_km: Elevator height (km)

    Returns:
        Exit height clamped to [0, height_km]
    """
    result = intersect_line_cone(cone, origin, direction)
    logger.debug("Cone intersection: %s %s", result.kind.value, result.params)

    if cone.contains(origin + height_km * direction):
        raw = height_km
    else:
        raw = result.farthest()

    return clamp(0.0, raw, height_km)


def compute_shadow_heights(elevator, config: Optional[Config] = None) -> ShadowHeights:
    """Compute umbra and penumbra exit heights for an elevator.

    Args:
        elevator: ElevatorState snapshot, or an Elevator (its current state is used)
        config: Configuration object (uses global config if None)

    Returns:
        ShadowHeights (umbra_km, penumbra_km), both within [0, height].
        (0, 0) when the Sun is above the base station's horizon.
    """
    if config is None:
        config = get_config()

    state: ElevatorState = getattr(elevator, "state", elevator)
    sun = state.sun

    direction = normalize(state.top_eci())

    # Check to see if the sun has risen over the base station
    limb_radius = sun.diameter_km / 2 if config.shadow.use_upper_limb else 0.0
    _, elevation, _ = azimuth_elevation(
        state.latitude,
        state.longitude,
        0.0,
        sun.position_eci,
        state.time,
        upper_limb_radius_km=limb_radius,
    )
    if elevation > 0:
        logger.debug("Sun elevation %.4f rad at base, no shadow", elevation)
        return ShadowHeights(0.0, 0.0)

    umbra, penumbra = build_shadow_cones(sun, state.time, config.shadow.earth_radius_km)

    heights = ShadowHeights(
        umbra_km=exit_height(umbra, state.base_eci, direction, state.height),
        penumbra_km=exit_height(penumbra, state.base_eci, direction, state.height),
    )
    logger.debug(
        "Shadow heights at %s: umbra %.3f km, penumbra %.3f km",
        state.time.isot, heights.umbra_km, heights.penumbra_km,
    )
    return heights
