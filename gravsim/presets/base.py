"""Base class for preset scenarios."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from gravsim.physics.state import SystemState


class Preset(ABC):
    """Abstract base class for preset scenarios.

    A preset supplies the mass table and initial state consumed by
    :class:`gravsim.Simulator`, plus the simulator options that suit it.
    """

    mass_convention: str = "gm"
    probe: Optional[str] = None
    reference_body: Optional[str] = None
    epoch: float = 0.0

    @abstractmethod
    def generate(self) -> Tuple[Dict[str, float], SystemState]:
        """Generate initial conditions.

        Returns:
            Tuple of (masses, initial_state)
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this preset."""
        pass

    @property
    def duration(self) -> Optional[float]:
        """Simulated span covered by the reference state [days], if any."""
        return None

    def reference_state(self) -> Optional[SystemState]:
        """Known-correct state at the end of ``duration``, if any."""
        return None

    def simulator_options(self) -> Dict:
        """Keyword arguments for :class:`gravsim.Simulator` matching this preset."""
        return {
            "mass_convention": self.mass_convention,
            "probe": self.probe,
            "reference_body": self.reference_body,
            "epoch": self.epoch,
        }
