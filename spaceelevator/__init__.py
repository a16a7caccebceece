"""Earth shadow model for a space elevator."""

from spaceelevator.shadow.umbra import ShadowHeights, compute_shadow_heights
from spaceelevator.simulation.elevator import Elevator
from spaceelevator.simulation.state import ElevatorState

__version__ = "0.2.0"

__all__ = ["Elevator", "ElevatorState", "ShadowHeights", "compute_shadow_heights"]
