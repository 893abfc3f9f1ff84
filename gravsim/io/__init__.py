"""I/O utilities for reference data."""

from gravsim.io.ephemeris import Ephemeris, load_ephemeris, parse_ephemeris

__all__ = ["Ephemeris", "load_ephemeris", "parse_ephemeris"]
