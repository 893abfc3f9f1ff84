"""Exception types raised by the simulator."""


class GravsimError(Exception):
    """Base class for all gravsim errors."""
    pass


class ConfigurationError(GravsimError, ValueError):
    """Raised when masses, states or simulator options are inconsistent.

    Typical causes are a mass table and initial state that cover different
    bodies, an empty body set, or a probe/reference body that is not part of
    the simulated system. The simulator cannot recover from these.
    """
    pass


class DomainError(GravsimError, ArithmeticError):
    """Raised when two distinct bodies occupy the same position."""
    pass


class ConvergenceError(GravsimError, RuntimeError):
    """Raised when the predictor-corrector loop exceeds its iteration cap.

    Attributes:
        iterations: Number of refinement passes performed
        difference: Probe position change on the final pass [AU]
    """

    def __init__(self, message: str, iterations: int, difference: float):
        super().__init__(message)
        self.iterations = iterations
        self.difference = difference
