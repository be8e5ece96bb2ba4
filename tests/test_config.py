"""Tests for the SimulationConfig functionality."""

import pytest
from pydantic import ValidationError

from datacomm import (
    SimulationConfig,
    clear_config,
    get_config,
    modulate,
    set_config,
)
from datacomm.core import active_config, require_config
from datacomm.core.config import resolve
from datacomm.waveforms import sine_wave


class TestSimulationConfig:
    """Test SimulationConfig creation and validation."""

    def test_defaults(self):
        """Test the default sampling grids."""
        config = SimulationConfig()
        assert config.wave_points == 100
        assert config.analog_points == 500
        assert config.time_scale == 50
        assert config.samples_per_bit == 100
        assert config.guard_band == 500

    def test_validation(self):
        """Test that non-positive grids are rejected."""
        with pytest.raises(ValidationError):
            SimulationConfig(wave_points=0)
        config = SimulationConfig()
        with pytest.raises(ValidationError):
            config.time_scale = -1

    def test_extra_parameters(self):
        """Test get/set for custom parameters."""
        config = SimulationConfig()
        config.set("my_param", 42)
        assert config.get("my_param") == 42
        assert config.extra["my_param"] == 42
        config.set("wave_points", 64)
        assert config.wave_points == 64
        assert config.get("missing", "fallback") == "fallback"

    def test_yaml_round_trip(self, tmp_path):
        """Test saving and loading YAML."""
        path = tmp_path / "config.yaml"
        config = SimulationConfig(analog_points=250, guard_band=100.0)
        config.set("label", "lab-1")
        config.to_yaml(str(path))

        loaded = SimulationConfig.from_yaml(str(path))
        assert loaded.analog_points == 250
        assert loaded.guard_band == 100.0
        assert loaded.get("label") == "lab-1"


class TestGlobalConfig:
    """Test the global configuration context."""

    def test_set_and_clear(self):
        config = SimulationConfig()
        set_config(config)
        assert get_config() is config
        assert require_config() is config
        clear_config()
        assert get_config() is None

    def test_require_config_without_config(self):
        with pytest.raises(RuntimeError, match="No simulation configuration"):
            require_config()

    def test_active_config_falls_back_to_defaults(self):
        assert active_config().wave_points == 100

    def test_resolve(self):
        assert resolve("wave_points", 7) == 7
        set_config(SimulationConfig(wave_points=12))
        assert resolve("wave_points", None) == 12

    def test_generators_follow_config(self):
        set_config(SimulationConfig(wave_points=40, analog_points=80))
        assert len(sine_wave(1, 1)) == 40
        assert len(modulate("AM")) == 80
        assert len(modulate("AM", num_points=10)) == 10
