"""Plotting of simulated trajectories."""

from gravsim.render.orbit_plot import TrajectoryRecorder, plot_orbits

__all__ = ["TrajectoryRecorder", "plot_orbits"]
