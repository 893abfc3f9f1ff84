"""Two-body circular orbit preset."""

import math
from typing import Dict, Tuple

from gravsim.physics.state import SystemState
from gravsim.presets.base import Preset

SUN_GM = 0.2959122082855911e-03     # [AU^3/day^2]


class CircularOrbit(Preset):
    """Central body at rest at the origin with a satellite on a circular orbit.

    The satellite starts at (radius, 0, 0) moving along +y at the circular
    speed sqrt(GM/radius). Its own GM should be negligible next to the
    central body's, otherwise the central body drifts and the orbit is no
    longer closed.
    """

    def __init__(
        self,
        central_gm: float = SUN_GM,
        radius: float = 1.0,
        satellite_gm: float = 0.0,
        central: str = "Sun",
        satellite: str = "Earth"
    ):
        """Initialize circular orbit preset.

        Args:
            central_gm: Central body's GM [AU^3/day^2]
            radius: Orbital radius [AU]
            satellite_gm: Satellite's GM [AU^3/day^2]
            central: Central body name
            satellite: Satellite name
        """
        self.central_gm = central_gm
        self.radius = radius
        self.satellite_gm = satellite_gm
        self.central = central
        self.satellite = satellite
        self.probe = satellite
        self.reference_body = central

    @property
    def name(self) -> str:
        return "circular"

    @property
    def speed(self) -> float:
        """Circular orbital speed [AU/day]."""
        return math.sqrt(self.central_gm / self.radius)

    @property
    def period(self) -> float:
        """Keplerian orbital period [days]."""
        return 2.0 * math.pi * math.sqrt(self.radius ** 3 / self.central_gm)

    @property
    def duration(self) -> float:
        """One orbital period [days]."""
        return self.period

    def reference_state(self) -> SystemState:
        """After one period the satellite is back where it started."""
        return self.generate()[1]

    def generate(self) -> Tuple[Dict[str, float], SystemState]:
        masses = {self.central: self.central_gm, self.satellite: self.satellite_gm}
        state = SystemState(
            [self.central, self.satellite],
            [[0.0, 0.0, 0.0], [self.radius, 0.0, 0.0]],
            [[0.0, 0.0, 0.0], [0.0, self.speed, 0.0]],
        )
        return masses, state
