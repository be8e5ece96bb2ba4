"""Global simulation configuration for datacomm.

This module provides a global configuration context that can be accessed
from anywhere in the codebase without explicit passing. Generators read
their defaults from it whenever a keyword argument is left as ``None``.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SimulationConfig(BaseModel):
    """Central defaults for every generator in the package.

    The values reproduce the sampling grids of the interactive pages, so a
    caller that never touches the configuration gets the same traces.
    """

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    # Signal basics
    wave_points: int = Field(100, gt=0, description="Samples per basic waveform")

    # Analog modulation / demodulation
    analog_points: int = Field(500, gt=0, description="Samples per analog trace")
    time_scale: float = Field(50.0, gt=0, description="Sample index to time divisor")
    fm_sensitivity: float = Field(2.0, description="FM frequency sensitivity kf")
    pm_sensitivity: float = Field(2.0, description="PM phase sensitivity kp")

    # Digital-to-analog
    samples_per_bit: int = Field(100, gt=0, description="Samples per keyed bit")

    # Filtering
    filter_points: int = Field(500, gt=0, description="Samples in the filter demo")
    filter_time_scale: float = Field(
        20.0, gt=0, description="Sample index to time divisor for the filter demo"
    )

    # Multiplexing
    frame_interval: float = Field(1.0, gt=0, description="Seconds between TDM frames")
    travel_delay: float = Field(1.5, ge=0, description="Channel travel time in s")
    guard_band: float = Field(500.0, ge=0, description="FDM guard band in Hz")
    fdm_frequency_scale: float = Field(
        1e-3, gt=0, description="Hz to display radians per time unit for FDM"
    )

    # Extensibility for custom parameters
    extra: Dict[str, Any] = Field(
        default_factory=dict, description="Custom user-defined parameters"
    )

    @classmethod
    def from_yaml(cls, path: str) -> "SimulationConfig":
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            SimulationConfig instance
        """
        import yaml

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        extra = data.pop("extra", {}) or {}
        config = cls(**data)
        config.extra.update(extra)
        return config

    def to_yaml(self, path: str):
        """Save configuration to YAML file.

        Args:
            path: Path where YAML file will be saved
        """
        import yaml

        data = self.model_dump()

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a parameter value, checking extra dict if not in main fields."""
        if key in type(self).model_fields:
            return getattr(self, key)
        return self.extra.get(key, default)

    def set(self, key: str, value: Any):
        """Set a parameter value, using extra dict for custom parameters."""
        if key in type(self).model_fields:
            setattr(self, key, value)
        else:
            self.extra[key] = value


# ============================================================================
# Global Configuration Context
# ============================================================================

_global_config: Optional[SimulationConfig] = None


def set_config(config: SimulationConfig):
    """Set the global simulation configuration."""
    global _global_config
    _global_config = config


def get_config() -> Optional[SimulationConfig]:
    """Get the current global configuration, or None if not set."""
    return _global_config


def clear_config():
    """Clear the global configuration."""
    global _global_config
    _global_config = None


def require_config() -> SimulationConfig:
    """Get the current config, raising an error if not set.

    Returns:
        Current SimulationConfig instance

    Raises:
        RuntimeError: If no config is currently set
    """
    config = get_config()
    if config is None:
        raise RuntimeError(
            "No simulation configuration is set. Please call set_config(config) first."
        )
    return config


def active_config() -> SimulationConfig:
    """Returns the global configuration, or a default one when none is set."""
    config = get_config()
    return config if config is not None else SimulationConfig()


def resolve(name: str, value: Any) -> Any:
    """Returns ``value`` unless it is None, else the active config's ``name``."""
    if value is not None:
        return value
    return active_config().get(name)
