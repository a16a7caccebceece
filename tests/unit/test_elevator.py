"""Tests for the Elevator model."""

import numpy as np
import pytest
from astropy import units as u
from astropy.time import Time

from spaceelevator.config import Config, SiteConfig
from spaceelevator.simulation.elevator import Elevator
from spaceelevator.simulation.state import ElevatorState


NOON_120E = Time("2024-03-20T04:00:00", scale="utc")
MIDNIGHT_120E = Time("2024-03-20T16:00:00", scale="utc")


@pytest.fixture
def elevator() -> Elevator:
    """Create the reference elevator at 0N 120E, 100,000 km tall."""
    return Elevator(0.0, 120.0, 100_000.0, MIDNIGHT_120E, config=Config())


class TestElevatorInit:
    """Tests for Elevator construction."""

    def test_degrees_converted_to_radians(self):
        elevator = Elevator(45.0, -90.0, 10.0, NOON_120E)
        assert elevator.latitude == pytest.approx(np.pi / 4)
        assert elevator.longitude == pytest.approx(-np.pi / 2)
        assert elevator.latitude_deg == pytest.approx(45.0)
        assert elevator.longitude_deg == pytest.approx(-90.0)
        assert elevator.height == 10.0

    def test_initial_state_built(self, elevator: Elevator):
        state = elevator.state
        assert isinstance(state, ElevatorState)
        assert state.time == MIDNIGHT_120E
        assert np.linalg.norm(state.base_eci) == pytest.approx(6378.137, abs=0.01)
        assert state.sun.distance_km > 1e8

    def test_unix_seconds_accepted(self):
        elevator = Elevator(0.0, 120.0, 10.0, 1710907200)
        assert elevator.time.isot == "2024-03-20T04:00:00.000"

    def test_negative_height_rejected(self):
        with pytest.raises(ValueError):
            Elevator(0.0, 120.0, -1.0, NOON_120E)

    def test_invalid_latitude_propagates(self):
        with pytest.raises(ValueError):
            Elevator(95.0, 120.0, 10.0, NOON_120E)

    def test_unparsable_time_propagates(self):
        with pytest.raises(ValueError):
            Elevator(0.0, 120.0, 10.0, "yesterday-ish")

    def test_from_config_uses_site(self):
        config = Config(site=SiteConfig(latitude_deg=10.0, longitude_deg=20.0, height_km=500.0))
        elevator = Elevator.from_config(NOON_120E, config=config)
        assert elevator.latitude_deg == pytest.approx(10.0)
        assert elevator.longitude_deg == pytest.approx(20.0)
        assert elevator.height == 500.0


class TestElevatorTime:
    """Tests for time updates and snapshots."""

    def test_set_time_without_argument_is_accessor(self, elevator: Elevator):
        state = elevator.state
        assert elevator.set_time() == MIDNIGHT_120E
        assert elevator.state is state

    def test_set_time_replaces_snapshot(self, elevator: Elevator):
        old_state = elevator.state
        result = elevator.set_time(NOON_120E)

        assert result == NOON_120E
        assert elevator.time == NOON_120E
        assert elevator.state is not old_state
        # Base and sun move together
        assert not np.allclose(elevator.state.base_eci, old_state.base_eci)
        assert not np.allclose(elevator.state.sun.position_eci, old_state.sun.position_eci)

    def test_at_does_not_mutate(self, elevator: Elevator):
        state = elevator.state
        snapshot = elevator.at(NOON_120E)
        assert snapshot.time == NOON_120E
        assert elevator.state is state
        assert elevator.time == MIDNIGHT_120E

    def test_set_time_is_idempotent(self, elevator: Elevator):
        """Setting the same time twice yields identical state and heights."""
        instant = MIDNIGHT_120E + 3 * u.hour

        elevator.set_time(instant)
        first_state = elevator.state
        first_heights = elevator.shadow_heights()

        elevator.set_time(instant)
        second_state = elevator.state
        second_heights = elevator.shadow_heights()

        np.testing.assert_array_equal(first_state.base_eci, second_state.base_eci)
        np.testing.assert_array_equal(first_state.sun.position_eci, second_state.sun.position_eci)
        assert first_heights == second_heights


class TestShadowHeights:
    """Tests for Elevator.shadow_heights."""

    def test_sun_below_horizon(self, elevator: Elevator):
        """Reference scenario: sun below the base horizon."""
        umbra, penumbra = elevator.shadow_heights()
        assert umbra >= 0.0
        assert penumbra >= umbra
        assert penumbra <= 100_000.0

    def test_sun_above_horizon(self, elevator: Elevator):
        elevator.set_time(NOON_120E)
        assert elevator.shadow_heights() == (0.0, 0.0)

    def test_repr(self, elevator: Elevator):
        assert repr(elevator).startswith("Elevator(latitude_deg=0, longitude_deg=120")
