"""Basic example of using the gravity simulator."""

from gravsim import Simulator, distance
from gravsim.physics.diagnostics import Diagnostics
from gravsim.presets import SolarSystem


def main():
    """Compare the three update schemes over 36000 days of Solar System motion."""
    preset = SolarSystem()
    reference = preset.reference_state()
    n_steps = 10000
    dt = preset.duration / n_steps

    for label in ("update1", "update2", "update3"):
        masses, state = preset.generate()
        sim = Simulator(masses, state, **preset.simulator_options())
        diagnostics = Diagnostics(sim.system)
        _, _, initial_energy = diagnostics.compute_energies(sim.state)

        print(f"{label}: Simulating {n_steps} steps of {dt} days per step.")
        update = getattr(sim, label)
        for _ in range(n_steps):
            update(dt)

        _, _, final_energy = diagnostics.compute_energies(sim.state)
        error = distance(sim.state["Earth"].position, reference["Earth"].position)
        print(f"Simulated Earth pos = {sim.state['Earth'].position.tolist()}")
        print(f"Correct   Earth pos = {reference['Earth'].position.tolist()}")
        print(f"Error = {error:.6e} AU")
        print(f"Relative energy drift = {abs(final_energy - initial_energy) / abs(initial_energy):.3e}")
        print()


if __name__ == "__main__":
    main()
