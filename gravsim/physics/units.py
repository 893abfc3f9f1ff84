"""Physical constants and mass conventions."""

from dataclasses import dataclass

MASS_CONVENTIONS = ("gm", "mass")


@dataclass(frozen=True)
class UnitSystem:
    """Physical constants used to convert masses into gravitational parameters.

    Distances are in astronomical units and times in days. The speed of light
    is carried for completeness; the Newtonian dynamics never use it.
    """
    G: float = 6.67430e-11                 # gravitation constant [m^3 kg^-1 s^-2]
    au: float = 1.4959787069098932e+11     # astronomical unit [m/au]
    seconds_per_day: float = 86400.0
    c: float = 299792458.0                 # speed of light [m/s]

    @property
    def gravitational_constant(self) -> float:
        """G in [AU^3 * kg^-1 * day^-2]."""
        return self.G * (self.seconds_per_day * self.seconds_per_day) / (self.au ** 3)

    @property
    def speed_of_light(self) -> float:
        """Speed of light in [AU/day]."""
        return self.c * self.seconds_per_day / self.au


DEFAULT_UNITS = UnitSystem()
