"""Tests for the command-line interface."""

import json

import pytest
from gravsim.cli.main import build_simulator, main
from gravsim.utils.config import Config


def test_cli_circular_orbit(capsys):
    """Test a short quartic run of the circular orbit preset."""
    main(["--preset", "circular", "--steps", "200", "--scheme", "3"])
    out = capsys.readouterr().out

    assert "quartic: Simulating 200 steps" in out
    assert "Error =" in out
    assert "Simulation complete!" in out


def test_cli_all_schemes(capsys):
    """Test running every scheme in turn."""
    main(["--preset", "circular", "--steps", "100", "--all-schemes"])
    out = capsys.readouterr().out

    assert "update1 (explicit)" in out
    assert "update2 (predictor_corrector)" in out
    assert "update3 (quartic)" in out


def test_cli_plot(tmp_path, capsys):
    """Test writing an orbit plot."""
    plot_path = tmp_path / "orbits.png"
    main(["--preset", "circular", "--steps", "50", "--plot", str(plot_path), "--plot-every", "5"])

    assert plot_path.exists()
    assert plot_path.stat().st_size > 0
    assert "Orbit plot saved" in capsys.readouterr().out


def test_cli_config_file(tmp_path, capsys):
    """Test loading settings from a config file."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"preset": "circular", "scheme": 1, "n_steps": 20}))
    main(["--config", str(path)])
    assert "explicit: Simulating 20 steps" in capsys.readouterr().out


def test_cli_bad_probe(capsys):
    """Test that configuration errors exit with status 1."""
    with pytest.raises(SystemExit) as exc_info:
        main(["--preset", "circular", "--steps", "10", "--probe", "Vulcan"])
    assert exc_info.value.code == 1
    assert "Vulcan" in capsys.readouterr().err


def test_build_simulator_solar_system():
    """Test that the default dt spans the reference interval."""
    sim, reference = build_simulator(Config(n_steps=10000))
    assert sim.dt == 3.6
    assert sim.probe == "Mercury"
    assert sim.reference_body == "Earth"
    assert reference is not None


def test_cli_invalid_override(capsys):
    """Test that command-line overrides are validated like config values."""
    with pytest.raises(SystemExit) as exc_info:
        main(["--preset", "circular", "--steps", "0"])
    assert exc_info.value.code == 1
    assert "n_steps" in capsys.readouterr().err


def test_cli_config_file_is_overridden(tmp_path, capsys):
    """Test that command-line options take precedence over the config file."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"preset": "circular", "scheme": 1, "n_steps": 20}))
    main(["--config", str(path), "--scheme", "3", "--steps", "5"])
    assert "quartic: Simulating 5 steps" in capsys.readouterr().out
