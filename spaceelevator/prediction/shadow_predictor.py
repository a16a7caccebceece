"""Shadow transition prediction for points along the elevator.

Uses step-scan with binary search refinement for efficient transition detection.
"""

import logging
from typing import Optional

from astropy import units as u
from astropy.time import Time

from spaceelevator.config import Config
from spaceelevator.prediction.models import ShadowKind, ShadowTransition
from spaceelevator.shadow.umbra import compute_shadow_heights
from spaceelevator.simulation.elevator import Elevator
from spaceelevator.utils.coordinates import to_time


logger = logging.getLogger(__name__)


class ShadowPredictor:
    """Predicts when a height on the elevator passes into or out of shadow.

    Uses a step-scan algorithm with binary search refinement:
    1. Coarse scan to find the first change of shadow state
    2. Binary search to refine the crossing time to ``fine_tolerance``
    """

    def __init__(self, elevator: Elevator, config: Optional[Config] = None):
        """Initialize shadow predictor.

        Args:
            elevator: Elevator to predict transitions for
            config: Configuration object (uses global config if None)
        """
        self._elevator = elevator
        self._config = config

    def is_shadowed(
        self,
        instant,
        height_km: float,
        shadow: ShadowKind = ShadowKind.UMBRA,
    ) -> bool:
        """Check if the point at height_km is inside a shadow at an instant.

        The elevator's own state is not touched.
        """
        heights = compute_shadow_heights(self._elevator.at(instant), self._config)
        exit_km = heights.umbra_km if shadow is ShadowKind.UMBRA else heights.penumbra_km
        return exit_km > height_km

    def predict_next_transition(
        self,
        start,
        height_km: float,
        shadow: ShadowKind = ShadowKind.UMBRA,
        search_duration: float = 86400.0,  # One day
        coarse_step: float = 600.0,
        fine_tolerance: float = 1.0,
    ) -> Optional[ShadowTransition]:
        """Find the next time the point at height_km enters or leaves a shadow.

        Args:
            start: Absolute time to start the search
            height_km: Height above the base (0 <= height_km < elevator height)
            shadow: Umbra or penumbra
            search_duration: How far ahead to search (seconds)
            coarse_step: Step size for initial scan (seconds)
            fine_tolerance: Accuracy for the transition time (seconds)

        Returns:
            Next ShadowTransition or None if the shadow state does not change
            within the search duration

        Raises:
            ValueError: If the height or step parameters are out of range
        """
        if not 0 <= height_km < self._elevator.height:
            raise ValueError(
                f"Height must be within [0, {self._elevator.height}) km, got {height_km}"
            )
        if coarse_step <= 0 or fine_tolerance <= 0:
            raise ValueError("coarse_step and fine_tolerance must be positive")

        epoch = to_time(start)

        # Coarse scan to find approximate crossing
        prev_offset = 0.0
        prev_shadowed = self._shadowed_at(epoch, prev_offset, height_km, shadow)

        offset = coarse_step
        while offset <= search_duration:
            curr_shadowed = self._shadowed_at(epoch, offset, height_km, shadow)

            if curr_shadowed != prev_shadowed:
                crossing = self._binary_search_crossing(
                    epoch, prev_offset, offset, fine_tolerance, height_km, shadow,
                    entering=curr_shadowed,
                )
                transition = ShadowTransition(
                    shadow=shadow,
                    height_km=height_km,
                    time=epoch + crossing * u.s,
                    entering=curr_shadowed,
                )
                logger.info(
                    "%s %s %s at %.1f km",
                    transition.time.isot,
                    "entering" if transition.entering else "leaving",
                    shadow.value,
                    height_km,
                )
                return transition

            prev_offset = offset
            prev_shadowed = curr_shadowed
            offset += coarse_step

        return None

    def _shadowed_at(
        self,
        epoch: Time,
        offset: float,
        height_km: float,
        shadow: ShadowKind,
    ) -> bool:
        return self.is_shadowed(epoch + offset * u.s, height_km, shadow)

    def _binary_search_crossing(
        self,
        epoch: Time,
        low_offset: float,
        high_offset: float,
        tolerance: float,
        height_km: float,
        shadow: ShadowKind,
        entering: bool,
    ) -> float:
        """Binary search to refine crossing time.

        Args:
            epoch: Search epoch
            low_offset: Lower bound (before crossing), seconds from epoch
            high_offset: Upper bound (after crossing), seconds from epoch
            tolerance: Target accuracy (seconds)
            height_km: Height above the base (km)
            shadow: Umbra or penumbra
            entering: True for sunlit at low, shadowed at high

        Returns:
            Refined crossing offset in seconds from epoch
        """
        while high_offset - low_offset > tolerance:
            mid_offset = (low_offset + high_offset) / 2
            mid_shadowed = self._shadowed_at(epoch, mid_offset, height_km, shadow)

            if mid_shadowed == entering:
                high_offset = mid_offset
            else:
                low_offset = mid_offset

        return (low_offset + high_offset) / 2
