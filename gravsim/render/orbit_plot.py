"""Orbit plots using matplotlib."""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from matplotlib.figure import Figure

from gravsim.physics.state import SystemState


class TrajectoryRecorder:
    """Step callback that keeps body positions every ``every`` steps.

    Attach with ``simulator.on_step_callback = recorder``.
    """

    def __init__(self, names: Sequence[str], every: int = 1):
        self.names = tuple(names)
        self.every = every
        self.times: List[float] = []
        self.positions: List[np.ndarray] = []

    def record(self, time: float, state: SystemState):
        self.times.append(time)
        self.positions.append(np.array(state.positions))

    def __call__(self, simulator):
        if simulator.step_count % self.every == 0:
            self.record(simulator.time, simulator.state)

    def trajectories(self) -> np.ndarray:
        """Recorded positions as a (samples, n, 3) array."""
        if not self.positions:
            return np.zeros((0, len(self.names), 3))
        return np.stack(self.positions)


def plot_orbits(
    recorder: TrajectoryRecorder,
    output_path: Union[str, Path],
    reference: Optional[SystemState] = None,
    figsize: Tuple[int, int] = (8, 8),
    dpi: int = 100,
    title: str = "Orbits (ecliptic x-y)"
) -> Path:
    """Plot recorded trajectories projected onto the x-y plane.

    Args:
        recorder: Recorder holding the trajectories
        output_path: Image file to write (format from suffix)
        reference: Optional reference snapshot drawn as crosses
        figsize: Figure size (width, height)
        dpi: Dots per inch
        title: Plot title

    Returns:
        Path of the written image
    """
    output_path = Path(output_path)
    tracks = recorder.trajectories()

    fig = Figure(figsize=figsize, dpi=dpi)
    ax = fig.add_subplot(1, 1, 1)
    ax.set_aspect('equal')
    ax.set_xlabel('x [AU]')
    ax.set_ylabel('y [AU]')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    for i, name in enumerate(recorder.names):
        if len(tracks):
            line, = ax.plot(tracks[:, i, 0], tracks[:, i, 1], linewidth=0.8, label=name)
            ax.plot(tracks[-1, i, 0], tracks[-1, i, 1], 'o', color=line.get_color(), markersize=3)
        if reference is not None and name in reference:
            pos = reference[name].position
            ax.plot(pos[0], pos[1], 'x', color='black', markersize=5)

    if recorder.names:
        ax.legend(loc='upper right', fontsize='small')
    fig.savefig(output_path)
    return output_path
