"""Configuration management."""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional, Union

from gravsim.physics.errors import ConfigurationError


@dataclass
class Config:
    """Simulation configuration."""
    # Simulation parameters
    preset: str = "solar_system"
    scheme: Union[int, str] = 3
    n_steps: int = 10000
    dt: Optional[float] = None
    mass_convention: str = "gm"

    # Simulator options; None falls back to the preset's choice
    probe: Optional[str] = None
    reference_body: Optional[str] = None
    tolerance: float = 1.0e-15
    max_iterations: Optional[int] = 1000
    refinement_passes: int = 2

    # Reference data
    ephemeris: Optional[str] = None

    # Output
    plot: Optional[str] = None
    plot_every: int = 10

    def __post_init__(self):
        if self.n_steps <= 0:
            raise ConfigurationError(f"n_steps must be positive, got {self.n_steps}")
        if self.refinement_passes < 0:
            raise ConfigurationError(f"refinement_passes must be >= 0, got {self.refinement_passes}")
        if self.max_iterations is not None and self.max_iterations <= 0:
            raise ConfigurationError(f"max_iterations must be positive or None, got {self.max_iterations}")
        if self.plot_every <= 0:
            raise ConfigurationError(f"plot_every must be positive, got {self.plot_every}")


def _is_yaml(path: Path) -> bool:
    return path.suffix in ('.yaml', '.yml')


def load_config(config_path: str) -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        Config object
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if _is_yaml(config_path):
            try:
                import yaml
            except ImportError:
                raise ImportError("YAML support requires PyYAML. Install with: pip install pyyaml")
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    known = {f.name for f in fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown config keys in {config_path}: {unknown}")

    return Config(**data)


def save_config(config: Config, output_path: str):
    """Save configuration to file.

    Args:
        config: Config object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)

    with open(output_path, 'w') as f:
        if _is_yaml(output_path):
            try:
                import yaml
            except ImportError:
                raise ImportError("YAML support requires PyYAML. Install with: pip install pyyaml")
            yaml.dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
